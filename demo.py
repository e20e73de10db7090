#!/usr/bin/env python
from sdk.client import StoreClient


def main():
    c = StoreClient()

    # -----------------------------
    # Create products
    # -----------------------------
    print("Creating products...")
    laptop = c.create_product("Laptop", "14 inch ultrabook", "LAP-001", 1500.0, 3, "electronics")
    mouse = c.create_product("Mouse", "Wireless mouse", "MOU-001", 25.5, 10, "electronics")
    print(laptop)
    print(mouse)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products (limit 1)...")
    print(c.list_products(limit=1))

    # -----------------------------
    # Create a cart and fill it
    # -----------------------------
    print("\nCreating cart...")
    cart = c.create_cart()
    print(cart)

    print("\nAdding products to cart...")
    c.add_product_to_cart(cart["id"], laptop["id"])
    c.add_product_to_cart(cart["id"], mouse["id"])
    print(c.add_product_to_cart(cart["id"], mouse["id"]))

    # -----------------------------
    # View cart
    # -----------------------------
    print("\nViewing cart...")
    print(c.get_cart(cart["id"]))

    # -----------------------------
    # Delete a product
    # -----------------------------
    print("\nDeleting mouse...")
    c.delete_product(mouse["id"])
    print(c.list_products())


if __name__ == "__main__":
    main()
