"""Seed a small grocery catalog for local development.

Creates categories, products and home page banners. Re-running is
idempotent; existing rows are matched by slug (banners by title).
"""

from decimal import Decimal

from catalog.models import Banner, Category, Product
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify

CATEGORIES = [
    ("Fruits", "Fresh seasonal fruit"),
    ("Vegetables", "Farm fresh vegetables and greens"),
    ("Dairy", "Milk, curd, paneer and cheese"),
    ("Bakery", "Breads, buns and cakes baked daily"),
]

PRODUCTS = [
    ("Alphonso Mango", "Fruits", "Sweet Ratnagiri mangoes, hand picked.", "349.00", 40, {"unit": "1kg"}),
    ("Robusta Banana", "Fruits", "Ripe bananas, great for smoothies.", "49.00", 120, {"unit": "6 pcs"}),
    ("Baby Spinach", "Vegetables", "Washed and ready to cook.", "45.00", 60, {"unit": "250g"}),
    ("Red Onion", "Vegetables", "Nashik red onions.", "38.00", 200, {"unit": "1kg"}),
    ("Toned Milk", "Dairy", "Pasteurised toned milk.", "28.00", 150, {"unit": "500ml"}),
    ("Malai Paneer", "Dairy", "Soft fresh paneer.", "95.00", 35, {"unit": "200g"}),
    ("Whole Wheat Bread", "Bakery", "No maida, baked this morning.", "55.00", 50, {"unit": "400g"}),
]

BANNERS = [
    ("Mango season is here", "Up to 20% off on Alphonso", "/categories/fruits"),
    ("Breakfast in 30 minutes", "Milk, bread and eggs delivered fast", "/categories/dairy"),
]


class Command(BaseCommand):
    help = "Seed development catalog data (categories, products, banners)"

    def add_arguments(self, parser):
        parser.add_argument("--image-base", default="https://images.example.com", help="Base URL for image links")

    @transaction.atomic
    def handle(self, *args, **options):
        image_base = options["image_base"].rstrip("/")
        self.stdout.write("Seeding catalog data...")

        categories = {}
        for name, description in CATEGORIES:
            category, _ = Category.objects.get_or_create(
                slug=slugify(name),
                defaults={
                    "name": name,
                    "description": description,
                    "icon_url": f"{image_base}/icons/{slugify(name)}.png",
                },
            )
            categories[name] = category

        created = 0
        for name, category, description, price, inventory, metadata in PRODUCTS:
            slug = slugify(name)
            _, was_created = Product.objects.get_or_create(
                slug=slug,
                defaults={
                    "name": name,
                    "category": categories[category],
                    "description": description,
                    "price": Decimal(price),
                    "inventory": inventory,
                    "metadata": metadata,
                    "image_url": f"{image_base}/products/{slug}.jpg",
                },
            )
            created += int(was_created)

        for position, (title, subtitle, link) in enumerate(BANNERS):
            Banner.objects.get_or_create(
                title=title,
                defaults={
                    "subtitle": subtitle,
                    "link_url": link,
                    "sort_order": position,
                    "image_url": f"{image_base}/banners/{slugify(title)}.jpg",
                },
            )

        self.stdout.write(self.style.SUCCESS(f"Seeded catalog ({created} new products)."))
