# tests/application/test_purchase_cycle_estimator.py

from datetime import datetime, timedelta

from route_planning.application.purchase_cycle_estimator import (
    diferenca_dias,
    estimate_next_purchase,
    intervalo_medio_dias,
)


def test_sem_vendas_ou_uma_venda_nao_projeta(venda):
    assert estimate_next_purchase([]) is None
    assert estimate_next_purchase([venda(1, datetime(2024, 1, 10))]) is None


def test_duas_vendas_com_dez_dias_de_intervalo(venda):
    vendas = [venda(1, datetime(2024, 1, 10)), venda(1, datetime(2024, 1, 20))]

    assert estimate_next_purchase(vendas) == datetime(2024, 1, 30)


def test_media_dos_intervalos_a_partir_da_ultima_venda(venda):
    # intervalos de 10 e 20 dias → média 15
    vendas = [
        venda(1, datetime(2024, 1, 31)),
        venda(1, datetime(2024, 1, 1)),
        venda(1, datetime(2024, 1, 11)),
    ]

    assert intervalo_medio_dias(vendas) == 15
    assert estimate_next_purchase(vendas) == datetime(2024, 2, 15)


def test_nao_altera_a_lista_recebida(venda):
    vendas = [venda(1, datetime(2024, 3, 1)), venda(1, datetime(2024, 1, 1))]
    copia = list(vendas)

    estimate_next_purchase(vendas)

    assert vendas == copia


def test_fracao_de_dia_conta_como_dia_inteiro(venda):
    # 1,5 dia entre as vendas → 2 dias
    vendas = [venda(1, datetime(2024, 1, 1, 0, 0)), venda(1, datetime(2024, 1, 2, 12, 0))]

    assert diferenca_dias(vendas[0].data, vendas[1].data) == 2
    assert estimate_next_purchase(vendas) == datetime(2024, 1, 4, 12, 0)


def test_sem_arredondamento_usa_intervalo_fracionario(venda):
    vendas = [venda(1, datetime(2024, 1, 1, 0, 0)), venda(1, datetime(2024, 1, 2, 12, 0))]

    assert estimate_next_purchase(vendas, arredondar_para_cima=False) == datetime(2024, 1, 4, 0, 0)


def test_media_fracionaria_nao_e_arredondada_na_projecao(venda):
    # intervalos de 1 e 2 dias → média 1,5 dia
    vendas = [
        venda(1, datetime(2024, 1, 1)),
        venda(1, datetime(2024, 1, 2)),
        venda(1, datetime(2024, 1, 4)),
    ]

    assert estimate_next_purchase(vendas) == datetime(2024, 1, 4) + timedelta(days=1.5)


def test_vendas_canceladas_nao_contam(venda):
    vendas = [
        venda(1, datetime(2024, 1, 1)),
        venda(1, datetime(2024, 1, 5), status="CANCELADA"),
        venda(1, datetime(2024, 1, 11)),
    ]

    assert estimate_next_purchase(vendas) == datetime(2024, 1, 21)
    # comportamento legado: todas as vendas entram (intervalos 4 e 6 → média 5)
    assert estimate_next_purchase(vendas, ignorar_canceladas=False) == datetime(2024, 1, 16)


def test_uma_venda_valida_e_uma_cancelada_nao_projeta(venda):
    vendas = [venda(1, datetime(2024, 1, 1)), venda(1, datetime(2024, 1, 5), status="cancelado")]

    assert estimate_next_purchase(vendas) is None
