import unittest
from datetime import datetime, timezone

from core.modelo import Address, Client
from core.status import (
    STATUS_TIMELINE,
    IncompleteClientError,
    InvalidStatusError,
    follow_up_date,
    proposal_expiration,
    proposal_valid_until,
    status_changed_at,
    status_index,
    status_label,
    update_status,
    validate_client_fields,
)


def _completo() -> Client:
    return Client(
        id="s1",
        name="Maria Souza",
        cpf="123.456.789-00",
        email="maria@example.com",
        phone="(11) 99999-0000",
        address=Address(
            street="Rua das Flores",
            number="100",
            neighborhood="Centro",
            zip="01000-000",
            state="SP",
            city="São Paulo",
        ),
        updated_at="2024-01-01T00:00:00+00:00",
    )


class TestValidacaoCadastro(unittest.TestCase):
    def test_completo(self):
        self.assertIsNone(validate_client_fields(_completo()))

    def test_primeira_pendencia_na_ordem(self):
        c = _completo()
        c.phone = ""
        c.address.city = "  "
        self.assertEqual("O Telefone é obrigatório.", validate_client_fields(c))

        c.phone = "1"
        self.assertEqual("A Cidade é obrigatória.", validate_client_fields(c))

    def test_cliente_vazio_pede_nome(self):
        self.assertEqual("O Nome Completo é obrigatório.", validate_client_fields(Client()))


class TestStatus(unittest.TestCase):
    def test_timeline_ordem(self):
        ids = [s.id for s in STATUS_TIMELINE]
        self.assertEqual(
            ["lead", "proposal_sent", "proposal_accepted", "approval", "installation", "completed"], ids
        )
        self.assertEqual(2, status_index("proposal_accepted"))
        self.assertEqual(0, status_index("inexistente"))
        self.assertEqual(0, status_index(None))
        self.assertEqual("Proposta Enviada", status_label("proposal_sent"))

    def test_atualiza_status(self):
        c = _completo()
        now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        out = update_status(c, "proposal_sent", now=now)
        self.assertEqual("proposal_sent", out.status)
        self.assertEqual(now.isoformat(), out.status_updated_at)
        self.assertEqual("lead", c.status)

    def test_cadastro_incompleto_bloqueia(self):
        c = _completo()
        c.cpf = ""
        with self.assertRaises(IncompleteClientError) as cm:
            update_status(c, "proposal_sent")
        self.assertIn("O CPF é obrigatório.", str(cm.exception))

    def test_status_desconhecido(self):
        with self.assertRaises(InvalidStatusError):
            update_status(Client(), "cancelado")


class TestDatas(unittest.TestCase):
    def test_retorno_45_dias(self):
        c = _completo()
        c.status_updated_at = "2024-03-01T12:00:00Z"
        self.assertEqual(datetime(2024, 4, 15, 12, 0, tzinfo=timezone.utc), follow_up_date(c))

    def test_retorno_sem_data_de_status_usa_updated_at(self):
        c = _completo()
        self.assertEqual(datetime(2024, 2, 15, tzinfo=timezone.utc), follow_up_date(c))

    def test_validade_da_proposta(self):
        self.assertEqual(datetime(2024, 1, 31), proposal_expiration(datetime(2024, 1, 1)))

    def test_validade_conta_do_envio(self):
        c = _completo()
        c.status_updated_at = "2024-03-01T12:00:00Z"
        self.assertEqual(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc), status_changed_at(c))
        self.assertEqual(datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc), proposal_valid_until(c))


if __name__ == "__main__":
    unittest.main()
