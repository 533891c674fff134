import unittest
from pathlib import Path

from streamlit.testing.v1 import AppTest

from core.modelo import Client
from ui.router import sincronizar_derivados

APP = str(Path(__file__).resolve().parents[1] / "app.py")

CADASTRO = {
    "name": "Maria Souza",
    "email": "maria@example.com",
    "cpf": "123.456.789-00",
    "phone": "(11) 99999-0000",
    "zip": "01000-000",
    "street": "Rua das Flores",
    "number": "100",
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
}


class TestEditorFluxo(unittest.TestCase):
    def _abrir_novo_cliente(self) -> AppTest:
        at = AppTest.from_file(APP, default_timeout=30)
        at.run()
        next(b for b in at.button if b.label == "Novo cliente").click().run()
        self.assertEqual("editor", self._ctx(at).pagina)
        return at

    def _ctx(self, at: AppTest):
        return at.session_state["app_ctx"]

    def _preencher(self, at: AppTest, campos) -> None:
        cid = self._ctx(at).cliente_id
        for campo, valor in campos.items():
            at.text_input(key=f"{cid}_{campo}").set_value(valor)

    def test_preencher_e_trocar_de_aba_na_mesma_execucao(self):
        at = self._abrir_novo_cliente()
        self._preencher(at, CADASTRO)
        at.button(key="aba_consumption").click().run()

        ctx = self._ctx(at)
        self.assertEqual("consumption", ctx.aba_atual)
        self.assertEqual([], [e.value for e in at.error])

        salvo = ctx.clientes.get_by_id(ctx.cliente_id)
        self.assertEqual("Maria Souza", salvo.name)
        self.assertEqual("SP", salvo.address.state)

    def test_cadastro_incompleto_trava_a_aba(self):
        at = self._abrir_novo_cliente()
        incompleto = dict(CADASTRO, city="")
        self._preencher(at, incompleto)
        at.button(key="aba_consumption").click().run()

        ctx = self._ctx(at)
        self.assertEqual("info", ctx.aba_atual)
        self.assertIn("A Cidade é obrigatória.", [e.value for e in at.error])

        # o rascunho é gravado mesmo incompleto
        self.assertEqual("Maria Souza", ctx.clientes.get_by_id(ctx.cliente_id).name)

    def test_mudar_status_avisa_e_mostra_validade(self):
        at = self._abrir_novo_cliente()
        self._preencher(at, CADASTRO)
        at.button(key="aba_status").click().run()

        cid = self._ctx(at).cliente_id
        at.button(key=f"{cid}_status_proposal_sent").click().run()

        ctx = self._ctx(at)
        self.assertEqual("proposal_sent", ctx.clientes.get_by_id(cid).status)
        self.assertIn("Status atualizado com sucesso!", [s.value for s in at.success])
        self.assertTrue(any("Proposta válida até" in i.value for i in at.info))
        self.assertTrue(any("Atualizado em:" in m.value for m in at.markdown))


class Ctx:
    def __init__(self):
        self.derivados = {}


class TestSincronizarDerivados(unittest.TestCase):
    def test_proposta_negociada_sobrevive_ate_mudar_o_investimento(self):
        ctx = Ctx()
        c = Client(id="d1", kit_price=10000, labor_price=2000)

        c = sincronizar_derivados(ctx, c)
        self.assertEqual(12000, c.proposal_value)

        c.proposal_value = 13000
        c.discount = 500
        c = sincronizar_derivados(ctx, c)
        # desconto mudou: volta ao calculado
        self.assertEqual(12000, c.proposal_value)
        self.assertEqual(11500, c.final_value)

        c.proposal_value = 13000
        c = sincronizar_derivados(ctx, c)
        self.assertEqual(13000, c.proposal_value)
        self.assertEqual(12500, c.final_value)

        c.kit_price = 12000
        c = sincronizar_derivados(ctx, c)
        self.assertEqual(14000, c.proposal_value)

    def test_cliente_reaberto_mantem_proposta(self):
        ctx = Ctx()
        c = sincronizar_derivados(ctx, Client(id="d2", kit_price=10000, proposal_value=9500))
        self.assertEqual(9500, c.proposal_value)


if __name__ == "__main__":
    unittest.main()
