import asyncio

from sqlalchemy import select

from app.db.database import db
from app.models.product import Product
from app.utils.text import slugify


# Sample products: (title, category, selling price, original price, stock, status)
PRODUCTS_DATA = [
    ("Canvas Tote Bag", "Bags", 250000, 1800, 12, "active"),
    ("Leather Card Holder", "Bags", 420000, 3200, 5, "active"),
    ("Mini Crossbody", "Bags", 690000, 5400, 0, "draft"),
    ("Running Shoes", "Shoes", 1450000, 11000, 8, "active"),
    ("Canvas Sneakers", "Shoes", 890000, 6800, 3, "active"),
    ("Linen Shirt", "Clothing", 560000, 4200, 20, "active"),
    ("Denim Jacket", "Clothing", 1290000, 9800, 4, "archived"),
    ("Matcha Powder 100g", "Food", 310000, 2400, 30, "active"),
]


async def seed_database():
    await db.connect()
    await db.create_all()

    async with db.session_factory() as session:
        # Check if data exists
        result = await session.execute(select(Product).limit(1))
        if result.scalar():
            print("Database already seeded")
            return

        positions: dict[str, int] = {}
        for title, category, selling, original, stock, status in PRODUCTS_DATA:
            order = positions.get(category, 0)
            positions[category] = order + 1
            session.add(Product(
                title=title,
                slug=slugify(title),
                price_selling=selling,
                price_original=original,
                images=[],
                category=category,
                stock=stock,
                status=status,
                order=order,
            ))

        await session.commit()
        print(f"Seeded {len(PRODUCTS_DATA)} products")


async def main():
    try:
        await seed_database()
    finally:
        await db.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
