from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.couriers.models import CourierProfile
from modules.orders.constants import OrderStatus, SourceSystem
from modules.orders.models import Order, OrderItem
from modules.stores.models import StoreAddress


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        stores = self._seed_stores()
        couriers = self._seed_couriers()
        orders_created = self._seed_orders()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"stores={len(stores)}, "
                f"couriers={couriers}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="dispatcher").exists():
            User.objects.create_user(
                "dispatcher", password="dispatcher123", is_staff=True
            )
            created += 1
        return created

    def _seed_stores(self) -> list[StoreAddress]:
        self.stdout.write("Creating store addresses...")
        stores: list[StoreAddress] = []
        seed_stores = [
            ("Indiranagar Hub", "100 Feet Road", "Bengaluru", "560038", 12.9719, 77.6412, True),
            ("Koramangala Hub", "80 Feet Road", "Bengaluru", "560034", 12.9352, 77.6245, False),
        ]
        for name, line1, city, pincode, lat, lng, is_default in seed_stores:
            store, _ = StoreAddress.objects.get_or_create(
                name=name,
                defaults={
                    "address_line_1": line1,
                    "city": city,
                    "state": "Karnataka",
                    "pincode": pincode,
                    "latitude": lat,
                    "longitude": lng,
                    "contact_name": f"{name} desk",
                    "contact_phone": "+910000000000",
                    "is_default": is_default,
                },
            )
            stores.append(store)
        self.stdout.write(self.style.SUCCESS("Creating store addresses... Done!"))
        return stores

    def _seed_couriers(self) -> int:
        self.stdout.write("Creating couriers...")
        User = get_user_model()
        created = 0
        seed_couriers = [
            ("rider.arjun", "Arjun", "Rao", True),
            ("rider.meera", "Meera", "Nair", True),
            ("rider.kabir", "Kabir", "Shah", False),
        ]
        for username, first_name, last_name, available in seed_couriers:
            user, user_created = User.objects.get_or_create(
                username=username,
                defaults={"email": f"{username}@example.com"},
            )
            if user_created:
                user.set_password("rider123")
                user.save(update_fields=["password"])
                created += 1
            CourierProfile.objects.get_or_create(
                user=user,
                defaults={
                    "first_name": first_name,
                    "last_name": last_name,
                    "phone": f"+91{random.randint(7000000000, 9999999999)}",
                    "is_available": available,
                },
            )
        # A courier without a profile row still belongs to the pool.
        if not User.objects.filter(username="rider.noprofile").exists():
            User.objects.create_user(
                "rider.noprofile",
                password="rider123",
                email="rider.noprofile@example.com",
            )
            created += 1
        self.stdout.write(self.style.SUCCESS("Creating couriers... Done!"))
        return created

    def _seed_orders(self) -> int:
        self.stdout.write("Creating orders...")
        orders_created = 0
        customers = [
            ("Asha Iyer", "12th Main, HAL 2nd Stage"),
            ("Rohan Das", "5th Cross, Domlur"),
            ("Priya Menon", "Church Street"),
            ("Vikram Singh", "Old Airport Road"),
        ]
        status_weights = [
            (OrderStatus.ACCEPTED, 0.4),
            (OrderStatus.ASSIGNED, 0.25),
            (OrderStatus.DELIVERED_TO_STORE, 0.2),
            (OrderStatus.DELIVERED, 0.15),
        ]
        statuses = [s for s, _ in status_weights]
        weights = [w for _, w in status_weights]

        for i in range(20):
            order_id = f"SEED-{i + 1:04d}"
            if Order.objects.filter(id=order_id).exists():
                continue
            name, street = random.choice(customers)
            created_at = timezone.now() - timedelta(days=random.randint(0, 14))
            order = Order.objects.create(
                id=order_id,
                order_status=random.choices(statuses, weights=weights, k=1)[0],
                customer_name=name,
                customer_phone=f"+91{random.randint(7000000000, 9999999999)}",
                delivery_address=f"{street}, Bengaluru",
                address_details={"line1": street, "city": "Bengaluru"},
                pickup_date=created_at.date(),
                delivery_date=(created_at + timedelta(days=2)).date(),
                payment_method="upi",
                source_system=SourceSystem.LOCAL,
                created_at=created_at,
            )

            total = Decimal("0.00")
            for _ in range(random.randint(1, 4)):
                quantity = random.randint(1, 3)
                price = Decimal(random.choice(["49.00", "79.00", "129.00"]))
                item = OrderItem.objects.create(
                    order=order,
                    product_name=random.choice(["Shirt", "Trousers", "Saree", "Blazer"]),
                    product_price=price,
                    service_type=random.choice(["wash_fold", "dry_clean", "iron"]),
                    quantity=quantity,
                    total_price=price * quantity,
                )
                total += item.total_price

            Order.objects.filter(id=order.id).update(total_amount=total)
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
