"""Tests for running SQL against the seeded demo database."""

import pytest
from sqlalchemy import text

from sqlbuilder.services.query_service import QueryResult, QueryService, split_statements
from sqlbuilder.services.templates import get_template


class TestSeed:
    def test_seed_row_counts(self, demo_engine):
        with demo_engine.connect() as conn:
            counts = {
                t: conn.execute(text(f"SELECT COUNT(*) FROM {t}")).scalar_one()
                for t in ("customers", "orders", "email_campaigns", "leads")
            }
        assert counts == {"customers": 5, "orders": 7, "email_campaigns": 5, "leads": 7}


class TestRun:
    def test_customers_round_trip(self, demo_engine):
        service = QueryService(demo_engine)
        res = service.run(
            "SELECT customer_id, customer_name FROM customers ORDER BY signup_date DESC LIMIT 10"
        )
        assert res["ok"] is True
        assert res["columns"] == ["customer_id", "customer_name"]
        assert len(res["rows"]) == 5
        assert res["rows"][0] == (5, "Enterprise Co")
        assert service.last_result == QueryResult(res["columns"], res["rows"])
        assert service.last_error is None

    def test_error_clears_previous_result(self, demo_engine):
        service = QueryService(demo_engine)
        service.run("SELECT * FROM leads")
        res = service.run("SELECT nope FROM customers")

        assert res["ok"] is False
        assert "nope" in res["error"]
        assert service.last_result is None
        assert service.last_error == res["error"]

    def test_success_clears_previous_error(self, demo_engine):
        service = QueryService(demo_engine)
        service.run("SELEC 1")
        service.run("SELECT 1 AS one")
        assert service.last_error is None
        assert service.last_result.rows == [(1,)]

    def test_blank_sql_not_executed(self, demo_engine):
        service = QueryService(demo_engine)
        res = service.run("   ")
        assert res["ok"] is False
        assert res["error"] == "Nothing to run"

    def test_null_values_preserved(self, demo_engine):
        service = QueryService(demo_engine)
        res = service.run("SELECT NULL AS missing")
        assert res["rows"] == [(None,)]

    def test_statement_without_rows(self, demo_engine):
        service = QueryService(demo_engine)
        res = service.run("CREATE TEMP TABLE scratch (x INTEGER)")
        assert res["ok"] is True
        assert res["columns"] == []
        assert service.last_result == QueryResult()

    def test_several_statements_show_first_result_set(self, demo_engine):
        res = QueryService(demo_engine).run("SELECT 1 AS a; SELECT 2 AS b")
        assert res["ok"] is True
        assert res["columns"] == ["a"]
        assert res["rows"] == [(1,)]

    def test_several_statements_run_in_order(self, demo_engine):
        res = QueryService(demo_engine).run(
            "CREATE TEMP TABLE t (x INTEGER); INSERT INTO t VALUES (1); SELECT x FROM t;"
        )
        assert res["ok"] is True
        assert res["rows"] == [(1,)]

    def test_failing_statement_rolls_back_the_batch(self, demo_engine):
        service = QueryService(demo_engine)
        res = service.run("DELETE FROM leads; SELECT nope FROM leads")
        assert res["ok"] is False
        assert service.run("SELECT COUNT(*) FROM leads")["rows"] == [(7,)]


class TestSplitStatements:
    def test_semicolon_inside_literal_kept(self):
        assert split_statements("SELECT 'a;b'; SELECT 2") == ["SELECT 'a;b'", "SELECT 2"]

    def test_trailing_semicolon_and_blanks_dropped(self):
        assert split_statements("SELECT 1;  ;\n") == ["SELECT 1"]

    def test_single_statement_without_semicolon(self):
        assert split_statements("SELECT 1") == ["SELECT 1"]


class TestTemplates:
    @pytest.mark.parametrize(
        "name, rows",
        [
            ("Email Campaign Performance", 3),
            ("Lead Source ROI", 4),
            ("Recent Customer Activity", 5),
            ("Customers at Risk (Churn)", 5),
            ("All Customers List", 5),
        ],
    )
    def test_template_runs_against_seed(self, demo_engine, name, rows):
        res = QueryService(demo_engine).run(get_template(name).query)
        assert res["ok"] is True, res["error"]
        assert len(res["rows"]) == rows

    def test_top_customers_reports_ambiguous_column(self, demo_engine):
        # текст шаблона дословный: customer_id без алиаса после JOIN
        res = QueryService(demo_engine).run(get_template("Top Customers by Revenue").query)
        assert res["ok"] is False
        assert "ambiguous column name" in res["error"]

    def test_email_campaign_performance(self, demo_engine):
        res = QueryService(demo_engine).run(get_template("Email Campaign Performance").query)
        assert res["ok"] is True
        assert len(res["rows"]) == 3
        assert "open_rate" in res["columns"]

    def test_lead_source_roi(self, demo_engine):
        res = QueryService(demo_engine).run(get_template("Lead Source ROI").query)
        assert res["ok"] is True
        assert {r[0] for r in res["rows"]} == {"Google Ads", "LinkedIn", "Referral", "Organic Search"}

    def test_unknown_template(self):
        assert get_template("Nope") is None
