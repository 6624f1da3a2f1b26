"""
Demonstration catalog
Inserted once, when the products table is empty
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from storefront.models import Product

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Celestial Chronograph",
        "description": "Luxury chronograph with a Swiss automatic movement. 42mm stainless steel case with anti-reflective sapphire crystal. Water resistant to 100m.",
        "price": 2499.99,
        "previous_price": 2999.99,
        "brand": "Angel Swiss",
        "category": "luxury",
        "image": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=500",
        "stock": 5,
        "is_featured": True,
    },
    {
        "name": "Midnight Classic",
        "description": "Elegant classic watch with a black dial and gold details. Genuine Italian leather strap. High-precision Japanese quartz movement.",
        "price": 899.99,
        "previous_price": None,
        "brand": "Angel Collection",
        "category": "classic",
        "image": "https://images.unsplash.com/photo-1524592094714-0f0654e20314?w=500",
        "stock": 15,
        "is_featured": True,
    },
    {
        "name": "Sport Pro X",
        "description": "Rugged sports watch with stopwatch, alarm and LED light. Water resistant to 200m. Ideal for water sports.",
        "price": 349.99,
        "previous_price": 449.99,
        "brand": "Angel Sport",
        "category": "sport",
        "image": "https://images.unsplash.com/photo-1542496658-e33a6d0d50f6?w=500",
        "stock": 25,
        "is_featured": True,
    },
    {
        "name": "Vintage Rose Gold",
        "description": "Vintage watch with a rose gold finish. Minimalist design with Roman numerals. Milanese mesh strap.",
        "price": 599.99,
        "previous_price": None,
        "brand": "Angel Vintage",
        "category": "classic",
        "image": "https://images.unsplash.com/photo-1533139502658-0198f920d8e8?w=500",
        "stock": 10,
        "is_featured": False,
    },
    {
        "name": "Digital Smartwatch Elite",
        "description": "Latest generation smartwatch with heart rate monitor, built-in GPS and smart notifications. 7-day battery.",
        "price": 799.99,
        "previous_price": 999.99,
        "brand": "Angel Tech",
        "category": "smart",
        "image": "https://images.unsplash.com/photo-1579586337278-3befd40fd17a?w=500",
        "stock": 20,
        "is_featured": True,
    },
    {
        "name": "Ocean Diver 300",
        "description": "Professional dive watch resistant to 300m. Unidirectional rotating bezel, helium valve and Super-LumiNova.",
        "price": 1299.99,
        "previous_price": None,
        "brand": "Angel Marine",
        "category": "sport",
        "image": "https://images.unsplash.com/photo-1548171915-e79a380a2a4b?w=500",
        "stock": 8,
        "is_featured": False,
    },
    {
        "name": "Executive Titanium",
        "description": "Ultralight titanium executive watch. Automatic movement with 72-hour power reserve. Sapphire crystal.",
        "price": 1899.99,
        "previous_price": 2199.99,
        "brand": "Angel Premium",
        "category": "luxury",
        "image": "https://images.unsplash.com/photo-1614164185128-e4ec99c436d7?w=500",
        "stock": 6,
        "is_featured": False,
    },
    {
        "name": "Minimalist White",
        "description": "Scandinavian minimalist design with a pure white dial. Interchangeable leather or NATO strap.",
        "price": 299.99,
        "previous_price": None,
        "brand": "Angel Basic",
        "category": "classic",
        "image": "https://images.unsplash.com/photo-1522312346375-d1a52e2b99b3?w=500",
        "stock": 30,
        "is_featured": False,
    },
    {
        "name": "Pilot Aviation",
        "description": "Pilot watch with a sliding slide rule. Large 44mm dial with high legibility. Inspired by classic aviation.",
        "price": 749.99,
        "previous_price": None,
        "brand": "Angel Aviation",
        "category": "classic",
        "image": "https://images.unsplash.com/photo-1587925358603-c2eea5305bbc?w=500",
        "stock": 12,
        "is_featured": False,
    },
    {
        "name": "Fitness Tracker Pro",
        "description": "Activity tracker with sleep and calorie tracking and more than 20 sport modes. Bright AMOLED display.",
        "price": 199.99,
        "previous_price": 249.99,
        "brand": "Angel Fit",
        "category": "smart",
        "image": "https://images.unsplash.com/photo-1575311373937-040b8e1fd5b6?w=500",
        "stock": 40,
        "is_featured": False,
    },
    {
        "name": "Skeleton Automatic",
        "description": "Skeleton watch showing the intricate mechanical movement. Matte black finish with blue details.",
        "price": 1599.99,
        "previous_price": None,
        "brand": "Angel Artisan",
        "category": "luxury",
        "image": "https://images.unsplash.com/photo-1509048191080-d2984bad6ae5?w=500",
        "stock": 4,
        "is_featured": True,
    },
    {
        "name": "Classic Leather Brown",
        "description": "Timeless classic with an aged brown leather strap. Cream dial with gold indices.",
        "price": 449.99,
        "previous_price": None,
        "brand": "Angel Heritage",
        "category": "classic",
        "image": "https://images.unsplash.com/photo-1526045431048-f857369baa09?w=500",
        "stock": 18,
        "is_featured": False,
    },
]


async def seed_products(db: AsyncSession) -> int:
    """
    Insert the demonstration catalog if no products exist yet

    Returns:
        Number of inserted products
    """
    count = (await db.execute(select(func.count(Product.id)))).scalar_one()
    if count:
        return 0

    db.add_all(Product(**data) for data in DEMO_PRODUCTS)
    await db.commit()

    logger.info(f"Inserted {len(DEMO_PRODUCTS)} demo products")
    return len(DEMO_PRODUCTS)
