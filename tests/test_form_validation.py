"""Client, quote and credential form validation."""

from decimal import Decimal

from django.test import SimpleTestCase

from labora_core.core.application.dtos.auth_dto import CredentialsInput, SignUpInput
from labora_core.core.application.dtos.client_dto import ClientInput
from labora_core.core.application.dtos.quote_dto import QuoteInput
from labora_core.core.application.services.form_validation import (
    normalize_client,
    normalize_quote,
    parse_amount,
    validate_client,
    validate_credentials,
    validate_quote,
    validate_sign_up,
)
from tests.helpers.fakes import client_payload, quote_payload


def _paths(errors) -> set[str]:
    return {e.path for e in errors}


class ClientFormTests(SimpleTestCase):
    def test_normalized_valid_client_has_no_errors(self) -> None:
        data = normalize_client(ClientInput.model_validate(client_payload()))
        self.assertEqual(data.cpf, "123.456.789-09")
        self.assertEqual(data.phone, "(61) 99999-8888")
        self.assertEqual(data.address.zip_code, "70000-000")
        self.assertEqual(data.address.state, "DF")
        self.assertIsNone(data.address.complement)
        self.assertEqual(validate_client(data), [])

    def test_cpf_and_cnpj_are_mutually_exclusive(self) -> None:
        both = normalize_client(ClientInput.model_validate(client_payload(cnpj="11222333000181")))
        self.assertIn("cpf", _paths(validate_client(both)))

        neither = normalize_client(ClientInput.model_validate(client_payload(cpf=None)))
        self.assertIn("cpf", _paths(validate_client(neither)))

    def test_invalid_cpf_check_digit(self) -> None:
        data = normalize_client(ClientInput.model_validate(client_payload(cpf="11111111111")))
        messages = [e.message for e in validate_client(data) if e.path == "cpf"]
        self.assertIn("CPF inválido", messages)

    def test_name_with_digits_is_rejected(self) -> None:
        data = normalize_client(ClientInput.model_validate(client_payload(full_name="Maria 2")))
        self.assertIn("full_name", _paths(validate_client(data)))

    def test_address_errors_use_nested_paths(self) -> None:
        payload = client_payload()
        payload["address"].update(street="", state="XX", zip_code="")
        data = normalize_client(ClientInput.model_validate(payload))
        paths = _paths(validate_client(data))
        self.assertIn("address.street", paths)
        self.assertIn("address.state", paths)
        self.assertIn("address.zip_code", paths)

    def test_invalid_email(self) -> None:
        data = normalize_client(ClientInput.model_validate(client_payload(email="maria@")))
        self.assertIn("email", _paths(validate_client(data)))


class QuoteFormTests(SimpleTestCase):
    def test_valid_quote(self) -> None:
        data = normalize_quote(QuoteInput.model_validate(quote_payload()))
        self.assertEqual(data.client_document, "123.456.789-09")
        self.assertIsNone(data.observations)
        self.assertEqual(validate_quote(data), [])

    def test_required_fields(self) -> None:
        data = normalize_quote(QuoteInput())
        self.assertEqual(
            _paths(validate_quote(data)),
            {"client_name", "client_document", "service_description", "value", "payment_method"},
        )

    def test_value_must_be_positive(self) -> None:
        data = normalize_quote(QuoteInput.model_validate(quote_payload(value="0")))
        self.assertIn("value", _paths(validate_quote(data)))

    def test_description_length_limit(self) -> None:
        data = normalize_quote(QuoteInput.model_validate(quote_payload(service_description="x" * 1001)))
        self.assertIn("service_description", _paths(validate_quote(data)))

    def test_payment_method_length_limit(self) -> None:
        data = normalize_quote(QuoteInput.model_validate(quote_payload(payment_method="Parcelado " * 11)))
        errors = validate_quote(data)
        self.assertEqual(_paths(errors), {"payment_method"})
        self.assertEqual(errors[0].message, "Método de pagamento muito longo")

    def test_parse_amount_accepts_brazilian_notation(self) -> None:
        self.assertEqual(parse_amount("1.234,50"), Decimal("1234.50"))
        self.assertEqual(parse_amount("R$ 89,90"), Decimal("89.90"))
        self.assertEqual(parse_amount("1500"), Decimal("1500"))
        self.assertIsNone(parse_amount("abc"))
        self.assertIsNone(parse_amount(""))


class CredentialsFormTests(SimpleTestCase):
    def test_short_password_and_bad_email(self) -> None:
        errors = validate_credentials(CredentialsInput(email="nope", password="123"))
        self.assertEqual(_paths(errors), {"email", "password"})

    def test_sign_up_requires_matching_passwords(self) -> None:
        data = SignUpInput(email="ana@labora.com.br", password="secret1", confirm_password="secret2")
        self.assertEqual(_paths(validate_sign_up(data)), {"confirm_password"})

    def test_valid_sign_up(self) -> None:
        data = SignUpInput(email="ana@labora.com.br", password="secret1", confirm_password="secret1")
        self.assertEqual(validate_sign_up(data), [])
