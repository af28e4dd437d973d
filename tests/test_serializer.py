"""Tests for JSON serialization of recorded values."""

import json
from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel

from api_response_dumper.serializer import (
    camel_case_key,
    escape_single_quotes,
    to_json,
)


@dataclass
class Order:
    order_id: int
    customer_name: str
    placed_on: date


class Customer(BaseModel):
    customer_id: int
    email_address: str


class TestCamelCaseKey:
    """Tests for camel_case_key function."""

    def test_converts_snake_case(self):
        assert camel_case_key("widget_id") == "widgetId"

    def test_lowercases_pascal_case(self):
        assert camel_case_key("Id") == "id"
        assert camel_case_key("FirstName") == "firstName"

    def test_lowercases_leading_acronym(self):
        assert camel_case_key("URL") == "url"
        assert camel_case_key("URLValue") == "urlValue"

    def test_leaves_camel_case_alone(self):
        assert camel_case_key("name") == "name"
        assert camel_case_key("displayName") == "displayName"


class TestToJson:
    """Tests for to_json function."""

    def test_renders_compact_json_with_camel_case_keys(self):
        assert to_json({"Id": 5, "Name": "x"}) == '{"id":5,"name":"x"}'

    def test_renders_dataclasses(self):
        order = Order(order_id=1, customer_name="alice", placed_on=date(2024, 1, 2))

        parsed = json.loads(to_json(order))

        assert parsed == {
            "orderId": 1,
            "customerName": "alice",
            "placedOn": "2024-01-02",
        }

    def test_renders_pydantic_models(self):
        customer = Customer(customer_id=7, email_address="a@example.com")

        assert to_json(customer) == '{"customerId":7,"emailAddress":"a@example.com"}'

    def test_renames_nested_keys(self):
        value = {"line_items": [{"unit_price": 3}], "Meta": {"page_size": 10}}

        parsed = json.loads(to_json(value))

        assert parsed == {"lineItems": [{"unitPrice": 3}], "meta": {"pageSize": 10}}

    def test_renders_scalars(self):
        assert to_json(None) == "null"
        assert to_json("x") == '"x"'
        assert to_json([1, 2]) == "[1,2]"

    def test_keeps_non_ascii_characters(self):
        assert to_json({"name": "café"}) == '{"name":"café"}'


class TestEscapeSingleQuotes:
    """Tests for escape_single_quotes function."""

    def test_escapes_single_quotes(self):
        assert escape_single_quotes('{"name":"O\'Brien"}') == '{"name":"O\\\'Brien"}'

    def test_leaves_backslashes_unescaped(self):
        assert escape_single_quotes('"C:\\\\dir"') == '"C:\\\\dir"'
