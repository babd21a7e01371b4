"""
Example 01: Basic Live Entity

This example registers a dataclass as a live entity and shows that two
handles to the same identity share their fields through the store.
"""

from dataclasses import dataclass
from typing import Optional

from live_object import LiveObjectService, StoreConfig, entity


@dataclass
class Customer:
    """Customer entity"""
    id: str
    name: str = ""
    email: Optional[str] = None
    referred_by: Optional["Customer"] = None

    def greeting(self) -> str:
        return f"Dear {self.name}"


def main():
    # The memory backend needs no server; use driver="redis" for a real store
    service = LiveObjectService.from_config(StoreConfig(driver="memory"))
    service.register(entity(Customer).key("id").auto_fields().build())

    print("=== Create ===")
    alice = service.get_or_create(Customer, "c-1")
    alice.name = "Alice"
    alice.email = "alice@example.com"
    print(f"Stored under: {alice.get_live_object_live_map().name}")

    print("\n=== Read through a second handle ===")
    same = service.get(Customer, "c-1")
    print(f"{same.id}: {same.name} <{same.email}>")
    print(same.greeting())

    print("\n=== Persist a detached instance ===")
    bob = service.persist(Customer("c-2", name="Bob"))
    bob.referred_by = alice
    print(f"{bob.name} was referred by {bob.referred_by.name}")

    print("\n=== Change identity ===")
    bob.id = "c-20"
    print(f"c-2 exists: {service.get(Customer, 'c-2') is not None}")
    print(f"c-20 name: {service.get(Customer, 'c-20').name}")

    print("\n=== Delete ===")
    service.delete(Customer, "c-1")
    print(f"c-1 exists: {service.get(Customer, 'c-1') is not None}")

    service.close()


if __name__ == "__main__":
    main()
