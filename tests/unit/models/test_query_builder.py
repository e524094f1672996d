# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for QueryBuilder class."""

import unittest
from unittest.mock import MagicMock

from MarketingCloud.DataExtensions.data._filter_query import _build_filter_query
from MarketingCloud.DataExtensions.models.query_builder import QueryBuilder


class TestQueryBuilder(unittest.TestCase):
    """Test cases for the QueryBuilder class."""

    def test_basic_construction(self):
        qb = QueryBuilder()
        self.assertEqual(qb.data_extension, "default")
        self.assertEqual(qb.build(), {})

    def test_where_plain_pairs(self):
        spec = QueryBuilder().where("city", "Lisbon").where("active", True).build()
        self.assertEqual(spec, {"city": "Lisbon", "active": True})

    def test_filter_eq_string(self):
        spec = QueryBuilder().filter_eq("name", "Contoso").build()
        self.assertEqual(spec["$filter"], "name eq 'Contoso'")

    def test_filter_eq_escapes_quotes(self):
        spec = QueryBuilder().filter_eq("name", "O'Brien").build()
        self.assertEqual(spec["$filter"], "name eq 'O''Brien'")

    def test_filter_values(self):
        spec = (
            QueryBuilder()
            .filter_eq("statecode", 0)
            .filter_ne("vip", True)
            .filter_gt("age", 30)
            .filter_ge("score", 1.5)
            .filter_lt("price", 100)
            .filter_le("stock", 5)
            .filter_eq("deleted_at", None)
            .build()
        )
        self.assertEqual(
            spec["$filter"],
            "statecode eq 0 and vip ne true and age gt 30 and score ge 1.5 "
            "and price lt 100 and stock le 5 and deleted_at eq null",
        )

    def test_string_functions_and_raw(self):
        spec = (
            QueryBuilder()
            .filter_contains("name", "Ana")
            .filter_startswith("email", "a")
            .filter_raw("(tier eq 'gold' or tier eq 'platinum')")
            .build()
        )
        self.assertEqual(
            spec["$filter"],
            "contains(name, 'Ana') and startswith(email, 'a') and (tier eq 'gold' or tier eq 'platinum')",
        )

    def test_order_by_top_skip(self):
        spec = QueryBuilder().order_by("name").order_by("age", descending=True).top(10).skip(20).build()
        self.assertEqual(spec, {"$orderby": "name asc,age desc", "$top": 10, "$skip": 20})

    def test_top_and_skip_validation(self):
        with self.assertRaises(ValueError):
            QueryBuilder().top(0)
        with self.assertRaises(ValueError):
            QueryBuilder().skip(-1)

    def test_build_serializes(self):
        spec = QueryBuilder().where("city", "Lisbon").filter_gt("age", 30).order_by("name").top(5).build()
        self.assertEqual(
            _build_filter_query(spec),
            "?city=Lisbon&$filter=age%20gt%2030&$orderby=name%20asc&$top=5",
        )

    def test_execute_requires_binding(self):
        with self.assertRaises(RuntimeError):
            QueryBuilder().execute()

    def test_execute_delegates_to_query_ops(self):
        ops = MagicMock()
        ops.get.return_value = ["row"]
        qb = QueryBuilder("customers").filter_eq("tier", "gold")
        qb._query_ops = ops
        self.assertEqual(qb.execute(), ["row"])
        ops.get.assert_called_once_with({"$filter": "tier eq 'gold'"}, "customers")
