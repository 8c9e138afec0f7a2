"""Formatting helpers for estimate output.

Display rounding only: values are formatted the way a contractor reads them
on a quote ('$4,180.50', '12,345 BF', '1.25 sets').
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from foamdesk.models.estimate import EstimateResult


def format_currency(amount: float) -> str:
    """Format an amount as dollars with cents and comma separators.

    Negative amounts keep the sign in front of the dollar sign ('-$12.00').
    """
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def format_board_feet(board_feet: float) -> str:
    """Format board footage rounded to whole board feet ('12,345 BF')."""
    return f"{board_feet:,.0f} BF"


def format_sets(sets: float) -> str:
    """Format a set count to two decimals ('1.25 sets', '1.00 set')."""
    label = "set" if round(sets, 2) == 1 else "sets"
    return f"{sets:,.2f} {label}"


def format_area(square_feet: float) -> str:
    """Format an area in square feet ('1,200 SF')."""
    return f"{square_feet:,.0f} SF"


def format_result(result: EstimateResult) -> dict[str, str]:
    """Display strings for every figure of a live estimate result."""
    return {
        "wall_area": format_area(result.wall_area),
        "roof_area": format_area(result.roof_area),
        "board_feet_open": format_board_feet(result.board_feet_open),
        "board_feet_closed": format_board_feet(result.board_feet_closed),
        "sets_open": format_sets(result.sets_open),
        "sets_closed": format_sets(result.sets_closed),
        "material_cost": format_currency(result.material_cost),
        "labor_cost": format_currency(result.labor_cost),
        "misc_cost": format_currency(result.misc_cost),
        "subtotal": format_currency(result.subtotal),
        "tax": format_currency(result.tax),
        "total": format_currency(result.total),
    }
