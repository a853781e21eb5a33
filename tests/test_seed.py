"""
Seeding and CLI commands
"""
from sqlalchemy import func, select

from storefront.extensions import db
from storefront.models import Order, Product, User
from storefront.seed import DEFAULT_PRODUCTS, seed
from storefront.services.order_service import OrderService


def _count(model):
    return db.session.scalar(select(func.count()).select_from(model))


class TestSeed:

    def test_seed_creates_accounts_and_catalog(self, app):
        result = seed()

        assert result["admin"].role == "admin"
        assert result["user"].role == "user"
        assert result["user"].check_password("user123")
        assert len(result["products"]) == len(DEFAULT_PRODUCTS)

    def test_seed_is_idempotent(self, app):
        first = seed()
        second = seed()

        assert first["user"].id == second["user"].id
        assert _count(User) == 2
        assert _count(Product) == len(DEFAULT_PRODUCTS)

    def test_reset_wipes_orders(self, app):
        result = seed()
        OrderService(db.session).create_order(
            result["user"].id, [{"productId": result["products"][0].id, "quantity": 1}]
        )
        assert _count(Order) == 1

        seed(reset=True)
        assert _count(Order) == 0
        assert _count(User) == 2


class TestCommands:

    def test_seed_command(self, app):
        runner = app.test_cli_runner()
        res = runner.invoke(args=["seed"])

        assert res.exit_code == 0, res.output
        assert "Seeded" in res.output
        assert _count(User) == 2

    def test_create_admin_command(self, app):
        runner = app.test_cli_runner()
        res = runner.invoke(args=["create-admin", "--email", "boss@example.com",
                                  "--password", "secret99"])

        assert res.exit_code == 0, res.output
        boss = db.session.execute(
            select(User).where(User.email == "boss@example.com")
        ).scalar_one()
        assert boss.is_admin
        assert boss.check_password("secret99")

    def test_create_admin_refuses_existing_without_force(self, app):
        seed()
        runner = app.test_cli_runner()
        res = runner.invoke(args=["create-admin", "--email", "user@example.com",
                                  "--password", "secret99"])

        assert "already exists" in res.output
        user = db.session.execute(
            select(User).where(User.email == "user@example.com")
        ).scalar_one()
        assert not user.is_admin
