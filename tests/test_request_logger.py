"""Tests for request logging middleware."""

import logging


def test_logs_api_requests(client, caplog):
    with caplog.at_level(logging.INFO, logger="blogapi.middleware.request_logger"):
        client.get("/getcomments")

    assert any("GET /getcomments -> 200" in r.getMessage() for r in caplog.records)


def test_skips_health_check(client, caplog):
    with caplog.at_level(logging.INFO, logger="blogapi.middleware.request_logger"):
        client.get("/")

    assert not [r for r in caplog.records if r.name == "blogapi.middleware.request_logger"]
