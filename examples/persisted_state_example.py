"""
Example demonstrating persisted state with StatefulRecord.

This example shows how to:
1. Store the current state's token in a record field
2. Restore the state when a record is loaded
3. Store the token in a custom field
4. Combine state transitions with save callbacks
"""

import logging
from datetime import datetime
from typing import Optional

from state_pattern import State
from state_pattern.records import Field, InMemoryBackend, StatefulRecord, before_save


# Initialize backend
backend = InMemoryBackend()


class Order(StatefulRecord, model_backend=backend):
    """
    Order moving through a fulfilment workflow.

    Demonstrates:
    - Pinned state tokens that survive refactoring
    - before_save: timestamps
    """

    id: str = Field(primary_key=True)
    customer: str
    updated_at: Optional[datetime] = None

    class Pending(State):
        state_name = "order.pending"

        def pay(self):
            self.transition_to(Order.Paid)

        def cancel(self):
            self.transition_to(Order.Cancelled)

        def ship(self):
            raise ValueError("Cannot ship an unpaid order")

    class Paid(State):
        state_name = "order.paid"

        def enter(self):
            print(f"   [ENTER] Order {self.stateful.id} paid, notifying warehouse")

        def ship(self):
            self.transition_to(Order.Shipped)

        def cancel(self):
            print(f"   [REFUND] Refunding order {self.stateful.id}")
            self.transition_to(Order.Cancelled)

    class Shipped(State):
        state_name = "order.shipped"

    class Cancelled(State):
        state_name = "order.cancelled"

    @before_save
    def update_timestamp(self):
        """Update timestamp."""
        self.updated_at = datetime.now()


Order.set_initial_state(Order.Pending)


class Ticket(StatefulRecord, model_backend=backend, state_attribute="status"):
    """Support ticket keeping its state token in the 'status' field."""

    id: str = Field(primary_key=True)
    status: Optional[str] = None

    class Open(State):
        def close(self):
            self.transition_to(Ticket.Closed)

        def reopen(self):
            print(f"   Ticket {self.stateful.id} is already open")

    class Closed(State):
        def close(self):
            print(f"   Ticket {self.stateful.id} is already closed")

        def reopen(self):
            self.transition_to(Ticket.Open)


Ticket.set_initial_state(Ticket.Open)


def example_1_persisting_state():
    """Example 1: The state token is saved with the record."""
    print("\n" + "=" * 60)
    print("Example 1: Persisting State")
    print("=" * 60)

    order = Order.create(id="order-1", customer="Alice")
    print(f"\n   New order state: {order.state}")

    order.pay()
    order.save()
    print(f"   After pay(): {order.state}, saved at {order.updated_at}")


def example_2_restoring_state():
    """Example 2: Loaded records resume where they left off."""
    print("\n" + "=" * 60)
    print("Example 2: Restoring State")
    print("=" * 60)

    loaded = Order.get(id="order-1")
    print(f"\n   Loaded order is {loaded.current_state!r}")

    loaded.ship()
    loaded.save()
    print(f"   After ship(): {Order.get(id='order-1').state}")

    pending = Order.create(id="order-2", customer="Bob")
    try:
        pending.ship()
    except ValueError as e:
        print(f"   order-2: {e}")


def example_3_custom_field():
    """Example 3: Storing the token in another field."""
    print("\n" + "=" * 60)
    print("Example 3: Custom State Field")
    print("=" * 60)

    ticket = Ticket.create(id="ticket-1", current_state=Ticket.Closed)
    print(f"\n   Ticket status: {ticket.status}")
    print(f"   Default 'state' field: {ticket.state}")

    ticket.reopen()
    ticket.save()
    print(f"   After reopen(): {Ticket.get(id='ticket-1').status}")


def example_4_unknown_token():
    """Example 4: Unknown tokens fall back to the initial state."""
    print("\n" + "=" * 60)
    print("Example 4: Unknown Tokens")
    print("=" * 60)

    order = Order(id="order-3", customer="Carol", state="order.lost_in_transit")
    print(f"\n   Fell back to {order.current_state!r} ({order.state})")


def main():
    """Run all examples."""
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("\n" + "#" * 60)
    print("# state_pattern - Persisted State Examples")
    print("#" * 60)

    try:
        example_1_persisting_state()
        example_2_restoring_state()
        example_3_custom_field()
        example_4_unknown_token()

        print("\n" + "=" * 60)
        print("All examples completed successfully!")
        print("=" * 60)

    finally:
        # Cleanup
        backend.clear()


if __name__ == "__main__":
    main()
