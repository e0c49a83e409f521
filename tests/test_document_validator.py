"""CPF/CNPJ check digits and display masks."""

from django.test import SimpleTestCase

from labora_core.core.domain.services.document_validator import (
    format_cnpj,
    format_cpf,
    format_phone,
    format_postal_code,
    format_tax_id,
    validate_cnpj,
    validate_cpf,
    validate_tax_id,
)


class TaxIdValidationTests(SimpleTestCase):
    def test_valid_cpf_with_and_without_mask(self) -> None:
        self.assertTrue(validate_cpf("123.456.789-09"))
        self.assertTrue(validate_cpf("12345678909"))

    def test_cpf_with_wrong_check_digit(self) -> None:
        self.assertFalse(validate_cpf("123.456.789-00"))

    def test_cpf_with_repeated_digits_is_rejected(self) -> None:
        self.assertFalse(validate_cpf("111.111.111-11"))
        self.assertFalse(validate_cpf("00000000000"))

    def test_valid_and_invalid_cnpj(self) -> None:
        self.assertTrue(validate_cnpj("11.222.333/0001-81"))
        self.assertFalse(validate_cnpj("11.222.333/0001-80"))
        self.assertFalse(validate_cnpj("11111111111111"))

    def test_tax_id_dispatches_on_length(self) -> None:
        self.assertTrue(validate_tax_id("123.456.789-09"))
        self.assertTrue(validate_tax_id("11222333000181"))
        self.assertFalse(validate_tax_id("1234567890"))
        self.assertFalse(validate_tax_id(""))
        self.assertFalse(validate_tax_id(None))


class MaskTests(SimpleTestCase):
    def test_cpf_mask_is_progressive(self) -> None:
        self.assertEqual(format_cpf("123"), "123")
        self.assertEqual(format_cpf("1234"), "123.4")
        self.assertEqual(format_cpf("12345678909"), "123.456.789-09")
        self.assertEqual(format_cpf("1234567890912"), "123.456.789-09")

    def test_cnpj_mask(self) -> None:
        self.assertEqual(format_cnpj("11222333000181"), "11.222.333/0001-81")
        self.assertEqual(format_cnpj("112223"), "11.222.3")

    def test_tax_id_mask_picks_layout_by_length(self) -> None:
        self.assertEqual(format_tax_id("12345678909"), "123.456.789-09")
        self.assertEqual(format_tax_id("11222333000181"), "11.222.333/0001-81")

    def test_phone_mask_mobile_and_landline(self) -> None:
        self.assertEqual(format_phone("61999998888"), "(61) 99999-8888")
        self.assertEqual(format_phone("6133334444"), "(61) 3333-4444")
        self.assertEqual(format_phone("61"), "61")

    def test_postal_code_mask(self) -> None:
        self.assertEqual(format_postal_code("70000000"), "70000-000")
        self.assertEqual(format_postal_code("70000-000"), "70000-000")

    def test_masks_reach_a_fixed_point_after_one_application(self) -> None:
        samples = [
            "", "1", "12", "123", "1234567", "12345678909", "123.456.789-09", "1234567890912",
            "112223330001", "11222333000181", "11.222.333/0001-81", "112223330001819999",
            "6133334444", "61999998888", "(61) 99999-8888", "(61) 3333-4444", "619999988887777",
            "70000", "700000001", "70000-000", "abc 12-3",
        ]
        for fmt in (format_tax_id, format_phone, format_postal_code):
            for raw in samples:
                with self.subTest(fmt=fmt.__name__, raw=raw):
                    once = fmt(raw)
                    self.assertEqual(fmt(once), once)
