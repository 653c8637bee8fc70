"""
Unit tests for the customers API status mapping

Services are replaced with mocks, so these tests only check how service
results become HTTP responses.
"""
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from bicycle_store.api.dependencies import get_customer_service, get_product_service
from bicycle_store.domain.customer import (
    BillingAndShippingAddress,
    CartItem,
    Customer,
    CustomerLookup,
    LookupStatus,
    PasswordChangeResult,
)
from bicycle_store.main import app
from bicycle_store.services.customer_service import CustomerService
from bicycle_store.services.product_service import ProductService


def make_customer(**overrides) -> Customer:
    data = dict(
        id=7,
        first_name="Kari",
        last_name="Nordmann",
        email="a@b.com",
        password="$2b$12$storedhashstoredhashstoredhashstoredhashstoredhashst",
        address=BillingAndShippingAddress(country="Norway", street_address="Kongens gate 10",
                                          postal_code="7011", city="Trondheim"),
    )
    data.update(overrides)
    return Customer(**data)


@pytest.fixture
def customer_service():
    service = MagicMock(spec=CustomerService)
    service.update.return_value = None
    return service


@pytest.fixture
def product_service():
    return MagicMock(spec=ProductService)


@pytest.fixture
def api(customer_service, product_service):
    """TestClient with mocked services"""
    app.dependency_overrides[get_customer_service] = lambda: customer_service
    app.dependency_overrides[get_product_service] = lambda: product_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCustomerLookupEndpoints:
    """GET endpoints"""

    def test_list_customers_hides_passwords(self, api, customer_service):
        customer_service.list_all.return_value = [make_customer(), make_customer(id=8, email="c@d.com")]

        response = api.get("/api/customers")

        assert response.status_code == 200
        body = response.json()
        assert [c["id"] for c in body] == [7, 8]
        assert body[0]["firstName"] == "Kari"
        assert "password" not in body[0]

    def test_get_one_customer(self, api, customer_service):
        customer_service.find_by_id.return_value = make_customer()

        response = api.get("/api/customers/7")

        assert response.status_code == 200
        assert response.json()["email"] == "a@b.com"
        customer_service.find_by_id.assert_called_once_with(7)

    def test_get_one_customer_not_found(self, api, customer_service):
        customer_service.find_by_id.return_value = None

        response = api.get("/api/customers/999")

        assert response.status_code == 404
        assert response.text == "Customer not found"

    def test_authenticated_customer(self, api, customer_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(
            status=LookupStatus.FOUND, customer=make_customer()
        )

        response = api.get("/api/customers/authenticated-customer", headers=auth_headers("a@b.com"))

        assert response.status_code == 200
        assert response.json()["lastName"] == "Nordmann"
        customer_service.lookup_by_email.assert_called_once_with("a@b.com")

    def test_authenticated_customer_not_found(self, api, customer_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(status=LookupStatus.NOT_FOUND)

        response = api.get("/api/customers/authenticated-customer", headers=auth_headers("x@y.com"))

        assert response.status_code == 404
        assert response.content == b""

    def test_authenticated_customer_requires_token(self, api, customer_service):
        response = api.get("/api/customers/authenticated-customer")

        assert response.status_code == 401
        customer_service.lookup_by_email.assert_not_called()

    def test_authenticated_address(self, api, customer_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(
            status=LookupStatus.FOUND, customer=make_customer()
        )

        response = api.get("/api/customers/authenticated-address", headers=auth_headers("a@b.com"))

        assert response.status_code == 200
        assert response.json() == {
            "country": "Norway",
            "streetAddress": "Kongens gate 10",
            "postalCode": "7011",
            "city": "Trondheim",
        }

    def test_authenticated_address_not_found(self, api, customer_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(status=LookupStatus.NOT_FOUND)

        response = api.get("/api/customers/authenticated-address", headers=auth_headers("x@y.com"))

        assert response.status_code == 404


class TestAddressUpdate:
    """POST /authenticated-address"""

    def test_updates_address_of_existing_customer(self, api, customer_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(
            status=LookupStatus.FOUND, customer=make_customer()
        )
        customer_service.update.return_value = None

        response = api.post(
            "/api/customers/authenticated-address",
            json={"country": "Sweden", "streetAddress": "Drottninggatan 5",
                  "postalCode": "11151", "city": "Stockholm"},
            headers=auth_headers("a@b.com")
        )

        assert response.status_code == 200
        assert response.text == "Address updated"
        customer_id, updated = customer_service.update.call_args.args
        assert customer_id == 7
        assert updated.address.city == "Stockholm"

    def test_unknown_customer_gets_404(self, api, customer_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(status=LookupStatus.NOT_FOUND)

        response = api.post(
            "/api/customers/authenticated-address",
            json={"city": "Stockholm"},
            headers=auth_headers("x@y.com")
        )

        assert response.status_code == 404
        assert response.text == "Address could not be found"
        customer_service.update.assert_not_called()

    def test_rejected_update_gets_404(self, api, customer_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(
            status=LookupStatus.INVALID, customer=make_customer(first_name="")
        )
        customer_service.update.return_value = "Customer is not valid"

        response = api.post(
            "/api/customers/authenticated-address",
            json={"city": "Bergen"},
            headers=auth_headers("a@b.com")
        )

        assert response.status_code == 404
        assert response.text == "Address could not be found"


class TestRegistration:
    """POST /api/customers"""

    def test_register_success(self, api, customer_service, sample_customer_data):
        customer_service.add.return_value = None

        response = api.post("/api/customers", json=sample_customer_data)

        assert response.status_code == 200
        assert response.text == "Customer Ola Nordmann added"
        registered = customer_service.add.call_args.args[0]
        assert registered.password == "Sykkel123"
        assert registered.address.street_address == "Storgata 1"

    def test_register_rejected_forwards_message(self, api, customer_service, sample_customer_data):
        customer_service.add.return_value = "Customer with email ola@bikeshop.no already exists"

        response = api.post("/api/customers", json=sample_customer_data)

        assert response.status_code == 400
        assert response.text == "Customer with email ola@bikeshop.no already exists"


class TestPasswordReset:
    """POST /reset-password"""

    def test_returns_generated_password(self, api, customer_service):
        customer_service.find_by_email.return_value = make_customer()
        customer_service.reset_password.return_value = "Xy12ab34Cd56"

        response = api.post("/api/customers/reset-password", json={"email": "a@b.com"})

        assert response.status_code == 200
        assert response.text == "Xy12ab34Cd56"
        customer_service.reset_password.assert_called_once_with("a@b.com")

    def test_unknown_email_gets_404(self, api, customer_service):
        customer_service.find_by_email.return_value = None

        response = api.post("/api/customers/reset-password", json={"email": "nobody@b.com"})

        assert response.status_code == 404
        customer_service.reset_password.assert_not_called()

    def test_generation_failure_gets_500(self, api, customer_service):
        customer_service.find_by_email.return_value = make_customer()
        customer_service.reset_password.return_value = None

        response = api.post("/api/customers/reset-password", json={"email": "a@b.com"})

        assert response.status_code == 500
        assert response.text == "Password could not be reset"

    def test_missing_email_field_is_rejected(self, api, customer_service):
        response = api.post("/api/customers/reset-password", json={"mail": "a@b.com"})

        assert response.status_code == 422


class TestPasswordUpdate:
    """POST /update-password"""

    @pytest.mark.parametrize("result, expected_status, expected_text", [
        (PasswordChangeResult.UPDATED, 200, ""),
        (PasswordChangeResult.MISMATCH, 401, "Old password doesent match"),
        (PasswordChangeResult.INVALID_CUSTOMER, 404, "Given customer is not valid"),
    ])
    def test_status_mapping(self, api, customer_service, auth_headers,
                            result, expected_status, expected_text):
        customer_service.change_password.return_value = result

        response = api.post(
            "/api/customers/update-password",
            json={"oldPassword": "old1", "newPassword": "new1"},
            headers=auth_headers("a@b.com")
        )

        assert response.status_code == expected_status
        assert response.text == expected_text
        customer_service.change_password.assert_called_once_with("a@b.com", "old1", "new1")

    def test_identity_comes_from_token(self, api, customer_service, auth_headers):
        customer_service.change_password.return_value = PasswordChangeResult.UPDATED

        api.post(
            "/api/customers/update-password",
            json={"email": "someone-else@b.com", "oldPassword": "old1", "newPassword": "new1"},
            headers=auth_headers("a@b.com")
        )

        assert customer_service.change_password.call_args.args[0] == "a@b.com"


class TestUpdateAndDelete:
    """PUT and DELETE /{id}"""

    def test_update_success(self, api, customer_service, sample_customer_data):
        customer_service.update.return_value = None

        response = api.put("/api/customers/7", json=sample_customer_data)

        assert response.status_code == 200
        assert response.content == b""
        assert customer_service.update.call_args.args[0] == 7

    def test_update_rejected_forwards_message(self, api, customer_service, sample_customer_data):
        customer_service.update.return_value = "Customer is not valid"

        response = api.put("/api/customers/7", json=sample_customer_data)

        assert response.status_code == 400
        assert response.text == "Customer is not valid"

    def test_delete(self, api, customer_service):
        response = api.delete("/api/customers/7")

        assert response.status_code == 204
        customer_service.delete.assert_called_once_with(7)


class TestCartRemoval:
    """DELETE /deleteProductInCart"""

    def test_removes_line_and_saves_customer(self, api, customer_service, product_service, auth_headers):
        line = CartItem(id=3, product_id=1, quantity=1)
        other = CartItem(id=4, product_id=2, quantity=2)
        customer_service.lookup_by_email.return_value = CustomerLookup(
            status=LookupStatus.FOUND, customer=make_customer(shopping_cart=[line, other])
        )
        product_service.find_order_by_id.return_value = line

        response = api.request("DELETE", "/api/customers/deleteProductInCart",
                               json=3, headers=auth_headers("a@b.com"))

        assert response.status_code == 200
        product_service.find_order_by_id.assert_called_once_with(3)
        saved = customer_service.update.call_args.args[1]
        assert [item.id for item in saved.shopping_cart] == [4]

    def test_line_not_in_cart_is_noop(self, api, customer_service, product_service, auth_headers):
        customer_service.lookup_by_email.return_value = CustomerLookup(
            status=LookupStatus.FOUND, customer=make_customer(shopping_cart=[CartItem(id=4, product_id=2)])
        )
        product_service.find_order_by_id.return_value = None

        response = api.request("DELETE", "/api/customers/deleteProductInCart",
                               json=99, headers=auth_headers("a@b.com"))

        assert response.status_code == 200
        saved = customer_service.update.call_args.args[1]
        assert [item.id for item in saved.shopping_cart] == [4]

    @pytest.mark.parametrize("lookup", [
        CustomerLookup(status=LookupStatus.NOT_FOUND),
        CustomerLookup(status=LookupStatus.INVALID, customer=Customer(id=7, email="a@b.com")),
    ])
    def test_missing_or_invalid_customer_gets_400(self, api, customer_service, product_service,
                                                  auth_headers, lookup):
        customer_service.lookup_by_email.return_value = lookup

        response = api.request("DELETE", "/api/customers/deleteProductInCart",
                               json=3, headers=auth_headers("a@b.com"))

        assert response.status_code == 400
        customer_service.update.assert_not_called()

    def test_rejected_save_gets_400(self, api, customer_service, product_service, auth_headers):
        line = CartItem(id=3, product_id=1)
        customer_service.lookup_by_email.return_value = CustomerLookup(
            status=LookupStatus.FOUND, customer=make_customer(shopping_cart=[line])
        )
        product_service.find_order_by_id.return_value = line
        customer_service.update.return_value = "Customer with email a@b.com already exists"

        response = api.request("DELETE", "/api/customers/deleteProductInCart",
                               json=3, headers=auth_headers("a@b.com"))

        assert response.status_code == 400
