import re
from datetime import date
from typing import Any, Mapping, Optional

from adyen_soap.models import ValidationReport


class Validator:
    """
    Pre-validation of bank and card details before they are sent to the
    service. The service performs its own validation; these checks only
    catch obvious mistakes without a round trip.
    """

    _bic_pattern = re.compile(r"\A[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?\Z")
    _iban_cleaner_pattern = re.compile(r"[ \-\.]")
    _iban_format_pattern = re.compile(r"\A[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}\Z")
    _country_code_pattern = re.compile(r"\A[A-Z]{2}\Z")
    _card_number_pattern = re.compile(r"\A[0-9]{12,19}\Z")
    _cvc_pattern = re.compile(r"\A[0-9]{3,4}\Z")

    @staticmethod
    def _validate_bic(bic: Optional[str]) -> Optional[str]:
        """
        Validates ISO 9362 BIC formatting: 8 or 11 alphanumeric characters.
        """
        if not bic:
            return "BIC is missing."

        if not Validator._bic_pattern.match(bic):
            return f"Invalid BIC format: '{bic}'. Must match ISO 9362 standard 8 or 11 characters."

        return None

    @staticmethod
    def _validate_iban(iban: Optional[str]) -> Optional[str]:
        """
        Validates an International Bank Account Number using the Modulo-97
        algorithm. Spaces, hyphens and dots are ignored.
        """
        if not iban:
            return "IBAN is missing."

        if len(iban) > 100:
            return "Invalid IBAN structure: excessively long string rejected."

        formatted_iban = Validator._iban_cleaner_pattern.sub("", iban.strip().upper())

        if not Validator._iban_format_pattern.match(formatted_iban):
            return f"Invalid IBAN format: '{iban.strip()}' does not meet ISO 13616 standards."

        # Move the country code and check digits to the end
        rearranged = formatted_iban[4:] + formatted_iban[:4]

        # Letters become two digits (A=10 ... Z=35)
        numeric_iban = "".join(
            str(ord(char) - 55) if char.isalpha() else char for char in rearranged
        )

        if int(numeric_iban) % 97 != 1:
            return f"Invalid IBAN checksum: '{formatted_iban}'. Failed Modulo-97 algorithm."

        return None

    @staticmethod
    def _luhn_valid(number: str) -> bool:
        total = 0
        for index, char in enumerate(reversed(number)):
            digit = int(char)
            if index % 2 == 1:
                digit *= 2
                if digit > 9:
                    digit -= 9
            total += digit
        return total % 10 == 0

    @staticmethod
    def validate_bank(bank: Mapping[str, Any]) -> ValidationReport:
        """
        Checks the bank details used to store payout details.
        """
        errors = []

        iban_err = Validator._validate_iban(bank.get("iban"))
        if iban_err:
            errors.append(f"[IBAN] {iban_err}")

        bic_err = Validator._validate_bic(bank.get("bic"))
        if bic_err:
            errors.append(f"[BIC] {bic_err}")

        country_code = bank.get("country_code")
        if not country_code or not Validator._country_code_pattern.match(str(country_code)):
            errors.append(f"country_code must be exactly 2 uppercase letters, found: '{country_code}'")

        for key in ("bank_name", "owner_name"):
            if not str(bank.get(key) or "").strip():
                errors.append(f"{key} is missing or empty.")

        return ValidationReport(is_valid=not errors, errors=errors)

    @staticmethod
    def validate_card(card: Mapping[str, Any], today: Optional[date] = None) -> ValidationReport:
        """
        Checks card number (Luhn), CVC length and expiry of a card mapping.
        Keys that are absent are skipped, so one-click cards holding only a
        CVC can be checked too.
        """
        errors = []

        number = card.get("number")
        if number is not None:
            number = str(number).replace(" ", "")
            if not Validator._card_number_pattern.match(number):
                errors.append("[Number] Card number must be 12 to 19 digits.")
            elif not Validator._luhn_valid(number):
                errors.append("[Number] Card number fails the Luhn check.")

        cvc = card.get("cvc")
        if cvc is not None and not Validator._cvc_pattern.match(str(cvc)):
            errors.append("[CVC] CVC must be 3 or 4 digits.")

        month = card.get("expiry_month")
        year = card.get("expiry_year")
        if month is not None or year is not None:
            try:
                month_number = int(month)
                year_number = int(year)
            except (TypeError, ValueError):
                errors.append(f"[Expiry] Could not parse expiry '{month}/{year}'.")
            else:
                if not 1 <= month_number <= 12:
                    errors.append(f"[Expiry] Expiry month must be between 1 and 12, found: {month_number}")
                else:
                    today = today or date.today()
                    if (year_number, month_number) < (today.year, today.month):
                        errors.append(f"[Expiry] Card expired in {month_number:02d}/{year_number}.")

        return ValidationReport(is_valid=not errors, errors=errors)
