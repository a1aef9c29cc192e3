from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.dtos import ProductDTO
from modules.products.models import Product, ProductCategory
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

CATALOG = [
    ("Laptop Pro 15", "High-performance laptop with 15-inch display", Decimal("1299.99"), "LP-15-PRO", ProductCategory.ELECTRONICS, 50),
    ("Wireless Mouse", "Ergonomic wireless mouse with precision tracking", Decimal("29.99"), "WM-001", ProductCategory.ELECTRONICS, 200),
    ("Office Chair", "Comfortable office chair with lumbar support", Decimal("199.99"), "OC-DELUXE", ProductCategory.FURNITURE, 30),
    ("Coffee Maker", "Automatic coffee maker with timer function", Decimal("79.99"), "CM-AUTO", ProductCategory.KITCHEN, 75),
    ("Desk Lamp", "LED desk lamp with adjustable brightness", Decimal("34.99"), "DL-LED-01", ProductCategory.FURNITURE, 100),
    ("Running Shoes", "Lightweight running shoes with cushioned sole", Decimal("89.90"), "RS-42-BLU", ProductCategory.SPORTS, 8),
    ("Chef Knife", "8-inch stainless steel chef knife", Decimal("49.50"), "CK-8-SS", ProductCategory.KITCHEN, 3),
    ("Python Cookbook", None, Decimal("39.99"), "BK-PY-003", ProductCategory.BOOKS, 0),
    ("Building Blocks Set", "500-piece building blocks set", Decimal("24.99"), "TOY-BB-500", ProductCategory.TOYS, 0),
    ("Car Phone Mount", "Magnetic dashboard phone mount", Decimal("15.00"), "AUTO-PM-01", ProductCategory.AUTOMOTIVE, 40),
]


class Command(BaseCommand):
    help = "Seed database with a sample product catalog."

    def handle(self, *args, **options):
        self.stdout.write("Seeding product catalog...")
        service = ProductService(repository=ProductDjangoRepository())

        created = 0
        for name, description, price, sku, category, stock in CATALOG:
            if service.exists_by_sku(sku):
                continue
            service.create_product(
                ProductDTO(
                    name=name,
                    description=description,
                    price=price,
                    sku=sku,
                    category=category,
                    stock_quantity=stock,
                )
            )
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products_created={created}, "
                f"products_total={Product.objects.count()}"
            )
        )
