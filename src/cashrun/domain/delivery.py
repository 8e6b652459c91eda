"""Delivery-style resolution and runner handoff copy.

``delivery_style`` (COUNTED | SPEED) replaced the older ``delivery_mode``
(count_confirm | quick_handoff). Orders written before the switch only
carry the legacy field, so :func:`resolve_delivery_style` falls back to it.
The fallback goes away once the backfill is confirmed.
"""

from __future__ import annotations

from cashrun.domain.types import DeliveryMode, DeliveryStyle

DEFAULT_STYLE = DeliveryStyle.SPEED

_LEGACY_MODES: dict[str, DeliveryStyle] = {
    DeliveryMode.COUNT_CONFIRM: DeliveryStyle.COUNTED,
    DeliveryMode.QUICK_HANDOFF: DeliveryStyle.SPEED,
}

_ARRIVAL_INSTRUCTIONS: dict[DeliveryStyle, str] = {
    DeliveryStyle.COUNTED: (
        "This customer chose a Counted handoff.\n\n"
        "After you enter the code, stay with the customer while they count the cash "
        "in front of you. Do not leave until they confirm everything is correct."
    ),
    DeliveryStyle.SPEED: (
        "This customer chose a Speed handoff.\n\n"
        "After you enter the code, hand the cash to the customer and you may depart. "
        "They will count the cash later on their own."
    ),
}

_LABELS: dict[DeliveryStyle, str] = {
    DeliveryStyle.COUNTED: "Counted handoff",
    DeliveryStyle.SPEED: "Speed handoff",
}

_SHORT_HINTS: dict[DeliveryStyle, str] = {
    DeliveryStyle.COUNTED: "Stay while they count the cash.",
    DeliveryStyle.SPEED: "Hand off and you can leave.",
}

_CHIP_LABELS: dict[DeliveryStyle, str] = {
    DeliveryStyle.COUNTED: "Counted · let them count in front of you",
    DeliveryStyle.SPEED: "Speed · quick handoff after the code",
}

_OTP_FOOTERS: dict[DeliveryStyle, str] = {
    DeliveryStyle.COUNTED: (
        "Once the code is accepted, wait while the customer counts the cash in front of you."
    ),
    DeliveryStyle.SPEED: "Once the code is accepted, you may hand the cash and leave.",
}


def resolve_delivery_style(
    delivery_style: object = None,
    delivery_mode: object = None,
) -> DeliveryStyle:
    """Pick the effective style: explicit style, else legacy mode, else SPEED."""
    if delivery_style in (DeliveryStyle.COUNTED, DeliveryStyle.SPEED):
        return DeliveryStyle(str(delivery_style))
    if isinstance(delivery_mode, str) and delivery_mode in _LEGACY_MODES:
        return _LEGACY_MODES[delivery_mode]
    return DEFAULT_STYLE


def delivery_style_instruction(
    delivery_style: object = None,
    delivery_mode: object = None,
) -> str:
    """Arrival instructions for the runner, keyed by the effective style."""
    return _ARRIVAL_INSTRUCTIONS[resolve_delivery_style(delivery_style, delivery_mode)]


def delivery_style_label(delivery_style: object = None, delivery_mode: object = None) -> str:
    return _LABELS[resolve_delivery_style(delivery_style, delivery_mode)]


def delivery_style_hint(delivery_style: object = None, delivery_mode: object = None) -> str:
    return _SHORT_HINTS[resolve_delivery_style(delivery_style, delivery_mode)]


def delivery_style_chip_label(
    delivery_style: object = None, delivery_mode: object = None
) -> str:
    """Compact label for the style picker chip."""
    return _CHIP_LABELS[resolve_delivery_style(delivery_style, delivery_mode)]


def otp_footer_text(delivery_style: object = None, delivery_mode: object = None) -> str:
    return _OTP_FOOTERS[resolve_delivery_style(delivery_style, delivery_mode)]
