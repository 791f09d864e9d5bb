"""
Tests for the resource wrappers: paths, bodies and normalized results.
"""

from decimal import Decimal

import pytest

from storefront.exceptions import ResponseParseError
from storefront.models import Order, Product, SocialLinks

from tests.conftest import BASE_URL


@pytest.mark.unit
class TestAuthResource:
    def test_register_omits_missing_phone(self, shop, fake_api, store):
        fake_api.route("POST", "/api/auth/register",
                       json_body={"token": "T1", "user": {"id": "u2", "name": "Ravi"}})

        auth = shop.auth.register("Ravi", "ravi@example.com", "pw")

        assert fake_api.calls[0].json == {"name": "Ravi", "email": "ravi@example.com",
                                          "password": "pw"}
        assert auth.refresh_token is None
        assert store.get_token() == "T1"

    def test_register_sends_phone(self, shop, fake_api):
        fake_api.route("POST", "/api/auth/register", json_body={"token": "T1", "user": None})

        shop.auth.register("Ravi", "ravi@example.com", "pw", phone="98450")

        assert fake_api.calls[0].json["phone"] == "98450"

    def test_login_without_token_is_rejected(self, shop, fake_api, store):
        fake_api.route("POST", "/api/auth/login", json_body={"message": "ok"})

        with pytest.raises(ResponseParseError):
            shop.auth.login("a@b.c", "pw")
        assert store.load() is None

    def test_current_user(self, shop, logged_in):
        user = shop.auth.current_user()

        assert user.name == "Asha"
        assert user.is_admin is False


@pytest.mark.unit
class TestProductsResource:
    def test_list_without_filters(self, shop, fake_api):
        fake_api.route("GET", "/api/products", json_body=[])

        assert shop.products.list() == []

    def test_list_query_only_given_params(self, shop, fake_api):
        path = "/api/products?search=face%20wash&sort=price_asc&featured=true"
        fake_api.route("GET", path, json_body=[{"id": "p1", "name": "Wash", "price": 199}])

        products = shop.products.list(search="face wash", sort="price_asc", featured=True)

        assert fake_api.calls[0].path == path
        assert isinstance(products[0], Product)
        assert products[0].price == Decimal("199")

    def test_get_normalizes_image(self, shop, fake_api):
        fake_api.route("GET", "/api/products/p1",
                       json_body={"id": "p1", "name": "Serum", "price": 500, "image_path": "s.png"})

        product = shop.products.get("p1")

        assert product.image_url == f"{BASE_URL}/uploads/s.png"

    def test_update_and_delete(self, shop, fake_api):
        fake_api.route("PUT", "/api/products/p1", json_body={"id": "p1", "name": "X", "price": 1})
        fake_api.route("DELETE", "/api/products/p1", json_body={"message": "Product deleted"})

        shop.products.update("p1", {"stock": 4})

        assert fake_api.calls[0].json == {"stock": 4}
        assert shop.products.delete("p1") == "Product deleted"


@pytest.mark.unit
class TestUploadsResource:
    def test_upload_image_as_multipart(self, shop, fake_api):
        fake_api.route("POST", "/api/upload",
                       json_body={"url": "/uploads/abc.png", "fileName": "abc.png"})

        uploaded = shop.uploads.upload_image("a.png", b"data", "image/png")

        call = fake_api.calls[0]
        assert call.files == {"image": ("a.png", b"data", "image/png")}
        assert "Content-Type" not in call.headers
        assert (uploaded.url, uploaded.file_name) == ("/uploads/abc.png", "abc.png")


@pytest.mark.unit
class TestListResources:
    def test_categories(self, shop, fake_api):
        fake_api.route("GET", "/api/categories", json_body=[{"id": "c1", "name": "Skin"}])
        fake_api.route("GET", "/api/categories/all", json_body=[])
        fake_api.route("GET", "/api/categories/from-products", json_body=["Skin", "Hair"])

        assert [c.name for c in shop.categories.list()] == ["Skin"]
        assert shop.categories.list_all() == []
        assert shop.categories.from_products() == ["Skin", "Hair"]

    def test_banners_and_concerns(self, shop, fake_api):
        fake_api.route("GET", "/api/banners", json_body=[{"id": "b1", "image_path": "/img/b.jpg"}])
        fake_api.route("POST", "/api/concerns", json_body={"id": "k1", "title": "Acne"})

        banners = shop.banners.list_active()
        concern = shop.concerns.create({"title": "Acne"})

        assert banners[0].image_url == "/img/b.jpg"
        assert concern.title == "Acne"

    def test_reviews(self, shop, fake_api):
        fake_api.route("POST", "/api/products/p1/reviews",
                       json_body={"id": "r1", "rating": 5, "comment": "Great", "user_name": "A"})
        fake_api.route("GET", "/api/reviews/featured?limit=3", json_body=[])
        fake_api.route("GET", "/api/reviews/featured", json_body=[])

        review = shop.reviews.add("p1", 5, "Great", "A")
        shop.reviews.featured(limit=3)
        shop.reviews.featured()

        assert fake_api.calls[0].json == {"rating": 5, "comment": "Great", "user_name": "A"}
        assert review.rating == 5
        assert [c.path for c in fake_api.calls[1:]] == ["/api/reviews/featured?limit=3",
                                                         "/api/reviews/featured"]

    def test_reviews_for_product(self, shop, fake_api):
        fake_api.route("GET", "/api/products/p1/reviews",
                       json_body=[{"id": "r1", "rating": "4", "userName": "B"}, {"id": "r2"}])

        reviews = shop.reviews.for_product("p1")

        assert [r.rating for r in reviews] == [4, 0]
        assert reviews[0].user_name == "B"
        assert reviews[1].user_name == "Anonymous"


@pytest.mark.unit
class TestOrdersResource:
    def test_create_skips_missing_fields(self, shop, fake_api):
        fake_api.route("POST", "/api/orders", json_body={"id": "o1", "total_amount": "398.00"})

        order = shop.orders.create([{"product_id": "p1", "quantity": 2, "price": 199}],
                                   Decimal("398.00"))

        assert fake_api.calls[0].json == {
            "items": [{"product_id": "p1", "quantity": 2, "price": 199}],
            "total_amount": 398.0,
        }
        assert isinstance(order, Order)
        assert order.total_amount == Decimal("398.00")

    def test_track_encodes_email(self, shop, fake_api):
        path = "/api/orders/track?orderId=42&email=a%2Bb%40example.com"
        fake_api.route("GET", path, json_body={"id": "42", "delivery_status": "shipped"})

        order = shop.orders.track("42", "a+b@example.com")

        assert order.tracking_step == 2

    def test_update_status(self, shop, fake_api):
        fake_api.route("PUT", "/api/orders/o1/status",
                       json_body={"id": "o1", "delivery_status": "delivered"})

        order = shop.orders.update_status("o1", delivery_status="delivered")

        assert fake_api.calls[0].json == {"delivery_status": "delivered"}
        assert order.delivery_status == "delivered"


@pytest.mark.unit
class TestAccountResources:
    def test_update_profile(self, shop, fake_api):
        fake_api.route("PUT", "/api/users/profile", json_body={"id": "u1", "name": "Asha K"})

        profile = shop.users.update_profile(name="Asha K", avatar=None)

        assert fake_api.calls[0].json == {"name": "Asha K"}
        assert profile.name == "Asha K"

    def test_addresses(self, shop, fake_api):
        fake_api.route("GET", "/api/users/address",
                       json_body=[{"id": "a1", "first_name": "A", "city": "Pune"}])
        fake_api.route("DELETE", "/api/users/address/a1", json_body={"message": "Deleted"})

        assert shop.users.addresses()[0].city == "Pune"
        assert shop.users.delete_address("a1") == "Deleted"

    def test_save_and_update_address(self, shop, fake_api):
        fake_api.route("POST", "/api/users/address",
                       json_body={"id": "a2", "flat_house_no": "12B", "city": "Pune"})
        fake_api.route("PUT", "/api/users/address/a2",
                       json_body={"id": "a2", "address_line1": "14C", "city": "Pune"})

        saved = shop.users.save_address({"flat_house_no": "12B", "city": "Pune"})
        updated = shop.users.update_address("a2", {"flat_house_no": "14C"})

        assert fake_api.calls[0].json == {"flat_house_no": "12B", "city": "Pune"}
        assert saved.line1 == "12B"
        assert updated.line1 == "14C"

    def test_wishlist(self, shop, fake_api):
        fake_api.route("GET", "/api/wishlist/check/p1", json_body={"inWishlist": True})
        fake_api.route("GET", "/api/wishlist/check/p2", json_body={"inWishlist": False})
        fake_api.route("POST", "/api/wishlist", json_body={"id": "w1", "product_id": "p1"})

        assert shop.wishlist.contains("p1") is True
        assert shop.wishlist.contains("p2") is False
        item = shop.wishlist.add("p1")
        assert fake_api.calls[-1].json == {"product_id": "p1"}
        assert item.product_id == "p1"

    def test_contact_mark_read_sends_empty_object(self, shop, fake_api):
        fake_api.route("PUT", "/api/contact/m1/read",
                       json_body={"id": "m1", "name": "A", "email": "a@b.c",
                                  "message": "Hi", "is_read": True})

        message = shop.contact.mark_read("m1")

        call = fake_api.calls[0]
        assert call.json == {}
        assert call.headers["Content-Type"] == "application/json"
        assert message.is_read is True


@pytest.mark.unit
class TestSiteResources:
    def test_payment(self, shop, fake_api):
        fake_api.route("POST", "/api/payment/create-order",
                       json_body={"id": "order_1", "amount": 39800, "currency": "INR"})
        fake_api.route("POST", "/api/payment/verify", json_body={"status": "ok"})

        gateway_order = shop.payment.create_order(398)
        verification = shop.payment.verify("order_1", "pay_1", "sig")

        assert gateway_order.amount == 39800
        assert fake_api.calls[1].json == {"razorpay_order_id": "order_1",
                                          "razorpay_payment_id": "pay_1",
                                          "razorpay_signature": "sig"}
        assert verification.ok is True

    def test_social_links(self, shop, fake_api):
        fake_api.route("PUT", "/api/settings/social_links",
                       json_body={"key": "social_links", "value": {"instagram": "ig"}})

        links = shop.settings.update_social_links(SocialLinks(instagram="ig"))

        assert fake_api.calls[0].json == {"value": {"instagram": "ig"}}
        assert links.instagram == "ig"
        assert links.facebook is None

    def test_pages(self, shop, fake_api):
        fake_api.route("PUT", "/api/pages/about",
                       json_body={"slug": "about", "title": "About", "content": "<p>Hi</p>"})

        page = shop.pages.update("about", "About", "<p>Hi</p>")

        assert fake_api.calls[0].json == {"title": "About", "content": "<p>Hi</p>"}
        assert page.slug == "about"

    def test_dashboard_sales_chart(self, shop, fake_api):
        fake_api.route("GET", "/api/dashboard/sales-chart", json_body={
            "daily": [{"label": "Oct 1", "orders": 3, "revenue": 1200}],
            "monthly": [],
        })

        chart = shop.dashboard.sales_chart()

        assert chart.daily[0].revenue == Decimal("1200")
        assert chart.monthly == []


@pytest.mark.unit
class TestEmptyReplies:
    """Mutations answered with 204 or an empty 200 return None."""

    @pytest.mark.parametrize("status_code", [204, 200])
    @pytest.mark.parametrize("method,path,call", [
        ("PUT", "/api/orders/o1/status",
         lambda shop: shop.orders.update_status("o1", delivery_status="shipped")),
        ("PUT", "/api/contact/m1/read", lambda shop: shop.contact.mark_read("m1")),
        ("PUT", "/api/users/profile", lambda shop: shop.users.update_profile(name="A")),
        ("POST", "/api/users/address", lambda shop: shop.users.save_address({"city": "Pune"})),
        ("PUT", "/api/users/address/a1", lambda shop: shop.users.update_address("a1", {})),
        ("PUT", "/api/products/p1", lambda shop: shop.products.update("p1", {"price": 5})),
        ("PUT", "/api/banners/b1", lambda shop: shop.banners.update("b1", {"title": "x"})),
        ("POST", "/api/wishlist", lambda shop: shop.wishlist.add("p1")),
        ("POST", "/api/payment/verify", lambda shop: shop.payment.verify("o", "p", "s")),
        ("PUT", "/api/settings/social_links",
         lambda shop: shop.settings.update_social_links({"instagram": "x"})),
        ("PUT", "/api/pages/about", lambda shop: shop.pages.update("about", "About", "Hi")),
    ])
    def test_empty_reply_gives_none(self, shop, fake_api, status_code, method, path, call):
        fake_api.route(method, path, status_code=status_code)

        assert call(shop) is None
        assert len(fake_api.calls_to(method, path)) == 1
