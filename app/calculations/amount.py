"""
Investment Amount Synchronisation

The calculator edits a single reference-currency amount through two
controls: a slider (reference units) and a text field (display units).
These functions derive the next amount state from each kind of edit.
"""

from dataclasses import dataclass

from app.calculations.currency import convert_to_display, convert_to_reference
from app.calculations.formatting import format_input_text, parse_input_text
from app.calculations.projection import clamp


@dataclass(frozen=True)
class AmountState:
    """Reference amount plus what the text field and headline show."""

    base_amount_reference: float
    display_amount: float
    input_text: str


def amount_state(base_ref: float, rate: float) -> AmountState:
    """State with the text field showing the rounded display amount."""
    display = convert_to_display(base_ref, rate)
    return AmountState(
        base_amount_reference=base_ref,
        display_amount=display,
        input_text=format_input_text(display),
    )


def apply_slider_amount(
    slider_value: float, rate: float, minimum: float, maximum: float
) -> AmountState:
    """Slider drag: the value is already in reference units."""
    return amount_state(clamp(slider_value, minimum, maximum), rate)


def apply_typed_amount(
    text: str,
    current_ref: float,
    rate: float,
    minimum: float,
    maximum: float,
) -> AmountState:
    """
    Live typing in the amount field.

    The field keeps what the user typed (re-formatted with separators)
    while the reference amount follows it, clamped. Text with no digits
    clears the field and leaves the reference amount untouched.
    """
    value = parse_input_text(text)
    if value is None:
        return AmountState(
            base_amount_reference=current_ref,
            display_amount=convert_to_display(current_ref, rate),
            input_text="",
        )

    base_ref = clamp(convert_to_reference(value, rate), minimum, maximum)
    return AmountState(
        base_amount_reference=base_ref,
        display_amount=convert_to_display(base_ref, rate),
        input_text=format_input_text(value),
    )


def commit_typed_amount(
    text: str, rate: float, minimum: float, maximum: float
) -> AmountState:
    """
    Field blur or Enter: settle on the clamped amount.

    Empty text counts as zero, which clamps up to the minimum.
    """
    value = parse_input_text(text) or 0
    base_ref = clamp(convert_to_reference(value, rate), minimum, maximum)
    return amount_state(base_ref, rate)
