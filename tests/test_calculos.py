import math
import unittest

from core.calculos import (
    calculate_labor_cost,
    calculate_solar_system,
    minimum_kwh_for_connection,
)
from core.modelo import MONTH_KEYS, Client


def _mensal(v: float):
    return {k: float(v) for k in MONTH_KEYS}


def _cliente(consumo=300.0, irradiacao=5.0, **kw) -> Client:
    c = Client(id="c1", consumption=_mensal(consumo), irradiation=_mensal(irradiacao))
    for k, v in kw.items():
        setattr(c, k, v)
    return c


class TestCenarioCompleto(unittest.TestCase):
    def setUp(self):
        self.cliente = _cliente(
            panel_power_wp=550,
            system_efficiency=0.75,
            kwh_price=0.95,
            connection_type="monofasico",
            kit_price=15000,
            labor_type="fixed",
            labor_price=3000,
            extra_materials=0,
        )
        self.res = calculate_solar_system(self.cliente)

    def test_dimensionamento(self):
        r = self.res
        self.assertAlmostEqual(300.0, r.avg_monthly_consumption)
        self.assertAlmostEqual(10.0, r.avg_daily_consumption)
        self.assertAlmostEqual(5.0, r.avg_irradiation)
        self.assertAlmostEqual(2.667, r.required_system_power_kwp, places=3)
        self.assertAlmostEqual(4.849, r.panel_count_raw, places=3)
        self.assertEqual(5, r.panel_count_rounded)
        self.assertAlmostEqual(2.75, r.total_system_power_kwp)

    def test_geracao_mensal(self):
        self.assertEqual(list(MONTH_KEYS), list(self.res.monthly_generation.keys()))
        for k in MONTH_KEYS:
            self.assertAlmostEqual(309.375, self.res.monthly_generation[k])
        self.assertAlmostEqual(309.375, self.res.avg_monthly_generation)
        self.assertAlmostEqual(3712.5, self.res.total_generation)

    def test_financeiro(self):
        fin = self.res.financials
        self.assertEqual(3000, fin.calculated_labor_cost)
        self.assertEqual(18000, fin.total_investment)
        self.assertAlmostEqual(28.5, fin.minimum_bill_cost)
        self.assertAlmostEqual(285.0, fin.monthly_bill_without_solar)
        # compensável = 3600 - 360; geração (3712,5) maior que isso
        self.assertAlmostEqual(3240 * 0.95 / 12, fin.monthly_savings)
        self.assertAlmostEqual(28.5, fin.monthly_bill_with_solar)
        self.assertAlmostEqual(18000 / 256.5, fin.payback_months)
        self.assertAlmostEqual(fin.payback_months / 12, fin.payback_years)
        self.assertAlmostEqual(256.5 * 12 * 25 - 18000, fin.total_savings_25_years)

    def test_nao_muta_cliente(self):
        antes = _cliente()
        calculate_solar_system(antes)
        self.assertEqual(_cliente(), antes)


class TestArredondamentoPaineis(unittest.TestCase):
    def test_contagem_exata_nao_sobe(self):
        # 1500 kWh/mês -> 50 kWh/dia -> 10 kWp com painel de 1 kW
        r = calculate_solar_system(_cliente(consumo=1500, irradiacao=5.0, system_efficiency=1.0, panel_power_wp=1000))
        self.assertEqual(10.0, r.panel_count_raw)
        self.assertEqual(10, r.panel_count_rounded)

    def test_fracao_sobe(self):
        r = calculate_solar_system(_cliente(consumo=1501.5, irradiacao=5.0, system_efficiency=1.0, panel_power_wp=1000))
        self.assertGreater(r.panel_count_raw, 10.0)
        self.assertEqual(11, r.panel_count_rounded)

    def test_potencia_total_cobre_necessaria(self):
        for consumo in (50, 120, 300, 777, 2500):
            for wp in (330, 450, 550, 700):
                r = calculate_solar_system(_cliente(consumo=consumo, irradiacao=4.3, panel_power_wp=wp))
                self.assertEqual(math.ceil(r.panel_count_raw), r.panel_count_rounded)
                self.assertGreaterEqual(r.total_system_power_kwp + 1e-9, r.required_system_power_kwp)


class TestEntradasDegeneradas(unittest.TestCase):
    def test_tudo_zero(self):
        r = calculate_solar_system(_cliente(consumo=0, irradiacao=0, kit_price=1000))
        self.assertEqual(0.0, r.avg_irradiation)
        self.assertEqual(0.0, r.required_system_power_kwp)
        self.assertEqual(0.0, r.panel_count_raw)
        self.assertEqual(0, r.panel_count_rounded)
        self.assertEqual(0.0, r.total_system_power_kwp)
        self.assertTrue(all(v == 0.0 for v in r.monthly_generation.values()))
        self.assertEqual(0.0, r.financials.payback_months)
        self.assertEqual(0.0, r.financials.payback_years)

    def test_irradiacao_zero_usa_piso_no_divisor(self):
        r = calculate_solar_system(_cliente(consumo=300, irradiacao=0, system_efficiency=0.75))
        self.assertEqual(0.0, r.avg_irradiation)
        self.assertAlmostEqual(10.0 / 0.75, r.required_system_power_kwp)
        self.assertTrue(all(v == 0.0 for v in r.monthly_generation.values()))

    def test_eficiencia_zero_nao_levanta(self):
        r = calculate_solar_system(_cliente(consumo=300, irradiacao=5.0, system_efficiency=0.0))
        self.assertTrue(math.isinf(r.required_system_power_kwp))
        self.assertTrue(math.isinf(r.panel_count_raw))
        self.assertTrue(math.isnan(r.monthly_generation["jan"]))

    def test_eficiencia_e_consumo_zero_da_nan(self):
        r = calculate_solar_system(_cliente(consumo=0, irradiacao=5.0, system_efficiency=0.0))
        self.assertTrue(math.isnan(r.required_system_power_kwp))

    def test_painel_sem_potencia_usa_550w(self):
        base = calculate_solar_system(_cliente(panel_power_wp=550))
        r = calculate_solar_system(_cliente(panel_power_wp=0))
        self.assertAlmostEqual(base.panel_count_raw, r.panel_count_raw)
        self.assertEqual(5, r.panel_count_rounded)
        self.assertAlmostEqual(2.75, r.total_system_power_kwp)

    def test_campos_none_contam_como_zero(self):
        r = calculate_solar_system(_cliente(kit_price=None, labor_price=None, extra_materials=None))
        self.assertEqual(0.0, r.financials.total_investment)
        self.assertEqual(0.0, r.financials.payback_months)


class TestTarifaMinima(unittest.TestCase):
    def test_tabela_por_ligacao(self):
        self.assertEqual(30, minimum_kwh_for_connection("monofasico"))
        self.assertEqual(50, minimum_kwh_for_connection("bifasico"))
        self.assertEqual(100, minimum_kwh_for_connection("trifasico"))
        self.assertEqual(30, minimum_kwh_for_connection("desconhecido"))

    def test_conta_nunca_abaixo_do_minimo(self):
        c = _cliente(consumo=30, irradiacao=8.0, kwh_price=1.0, connection_type="monofasico")
        c.panel_power_wp = 5000
        r = calculate_solar_system(c)
        fin = r.financials
        self.assertAlmostEqual(360.0, fin.monthly_bill_with_solar * 12)
        self.assertEqual(0.0, fin.monthly_savings)
        self.assertEqual(0.0, fin.payback_months)

    def test_trifasico_desconta_100_kwh(self):
        r = calculate_solar_system(_cliente(consumo=300, irradiacao=20.0, kwh_price=1.0, connection_type="trifasico"))
        self.assertAlmostEqual(200.0, r.financials.monthly_savings)
        self.assertAlmostEqual(100.0, r.financials.monthly_bill_with_solar)


class TestMaoDeObra(unittest.TestCase):
    def test_percentual_do_kit(self):
        c = _cliente(kit_price=10000, labor_type="percent", labor_percent=20, labor_price=999, extra_materials=500)
        self.assertEqual(2000, calculate_labor_cost(c))
        fin = calculate_solar_system(c).financials
        self.assertEqual(2000, fin.calculated_labor_cost)
        self.assertEqual(12500, fin.total_investment)

    def test_valor_fixo_ignora_percentual(self):
        c = _cliente(kit_price=10000, labor_type="fixed", labor_price=1500, labor_percent=50)
        self.assertEqual(1500, calculate_labor_cost(c))


if __name__ == "__main__":
    unittest.main()
