"""
Sample breadboard used when the editor starts without a document.

Models a small "turn on autopay" flow:
  Invoice --Turn on Autopay--> Setup Autopay --CC Fields--> Confirm
  Setup Autopay --Cancel--> Invoice
"""

from breadboard.models import Breadboard


def seed_demo_data(board: Breadboard) -> Breadboard:
    """Populate a board with the autopay sample flow. Returns the same board."""
    invoice = board.create_place("Invoice")
    setup = board.create_place("Setup Autopay")
    confirm = board.create_place("Confirm")

    invoice.add_affordance(board.create_affordance("Turn on Autopay", connects_to=setup.id))
    invoice.add_affordance(board.create_affordance("View Details"))

    setup.add_affordance(board.create_affordance("CC Fields", connects_to=confirm.id))
    setup.add_affordance(board.create_affordance("Cancel", connects_to=invoice.id))

    confirm.add_affordance(board.create_affordance("Thank You Message"))

    return board
