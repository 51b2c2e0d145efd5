"""Display helpers for amounts and labels shown on schedules and documents"""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import List

UNITS = [
    "", "uno", "dos", "tres", "cuatro", "cinco", "seis", "siete", "ocho", "nueve",
    "diez", "once", "doce", "trece", "catorce", "quince", "dieciséis",
    "diecisiete", "dieciocho", "diecinueve", "veinte", "veintiuno", "veintidós",
    "veintitrés", "veinticuatro", "veinticinco", "veintiséis", "veintisiete",
    "veintiocho", "veintinueve",
]

TENS = [
    "", "", "veinte", "treinta", "cuarenta", "cincuenta",
    "sesenta", "setenta", "ochenta", "noventa",
]

HUNDREDS = [
    "", "ciento", "doscientos", "trescientos", "cuatrocientos", "quinientos",
    "seiscientos", "setecientos", "ochocientos", "novecientos",
]

PAYMENT_METHOD_LABELS = {
    "binance": "Binance",
    "paypal": "PayPal",
    "zelle": "Zelle",
    "mobile_payment": "Pago móvil",
    "bank_transfer": "Transferencia bancaria",
    "cash": "Efectivo",
    "discount": "Descuento",
}


def format_money(value: Decimal | float | int | str | None) -> str:
    """
    Format an amount with dot thousands separator and comma decimals.

    Example:
        1234567.891 → "1.234.567,89"
    """
    try:
        amount = Decimal(str(value)) if value is not None else Decimal("0")
    except ArithmeticError:
        amount = Decimal("0")
    if not amount.is_finite():
        amount = Decimal("0")

    text = f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"
    # 1,234.56 → 1.234,56
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def _group_to_words(number: int) -> str:
    """Words for 0-999"""
    if number == 100:
        return "cien"

    parts: List[str] = []
    hundreds, rest = divmod(number, 100)
    if hundreds:
        parts.append(HUNDREDS[hundreds])

    if rest < 30:
        if rest:
            parts.append(UNITS[rest])
    else:
        tens, units = divmod(rest, 10)
        parts.append(f"{TENS[tens]} y {UNITS[units]}" if units else TENS[tens])

    return " ".join(parts)


def _apocope(words: str) -> str:
    """'uno' becomes 'un' in front of mil/millón"""
    if words.endswith("veintiuno"):
        return words[: -len("veintiuno")] + "veintiún"
    if words.endswith("uno"):
        return words[:-1]
    return words


def amount_in_words(value: Decimal | float | int) -> str:
    """
    Spanish words for the integer part of an amount.

    Example:
        1521 → "mil quinientos veintiuno"
    """
    number = int(Decimal(str(value)).to_integral_value(rounding=ROUND_DOWN))
    if number == 0:
        return "cero"

    prefix = ""
    if number < 0:
        prefix = "menos "
        number = -number

    millions, rest = divmod(number, 1_000_000)
    thousands, units = divmod(rest, 1000)

    parts: List[str] = []
    if millions:
        if millions == 1:
            parts.append("un millón")
        else:
            # Groups above a million are spelled with the thousands rule
            high, low = divmod(millions, 1000)
            words = []
            if high:
                words.append("mil" if high == 1 else f"{_apocope(_group_to_words(high))} mil")
            if low:
                words.append(_apocope(_group_to_words(low)))
            parts.append(f"{' '.join(words)} millones")
    if thousands:
        parts.append("mil" if thousands == 1 else f"{_apocope(_group_to_words(thousands))} mil")
    if units:
        parts.append(_group_to_words(units))

    return prefix + " ".join(parts)


def translate_payment_method(method: str) -> str:
    return PAYMENT_METHOD_LABELS.get(method, method)