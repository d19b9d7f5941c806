"""Tests for credential redaction in stdlib logging."""

import logging

from jwtauth.util.logging import REDACTED, CredentialRedactingFilter


def make_record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord(
        name="jwtauth.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestCredentialRedactingFilter:
    def test_masks_bearer_header(self):
        record = make_record("Authorization: Bearer abc.def.ghi")

        assert CredentialRedactingFilter().filter(record) is True
        assert record.getMessage() == f"Authorization: Bearer {REDACTED}"

    def test_masks_bare_jwt_passed_as_argument(self):
        record = make_record("refresh failed for %s", "eyJhbGciOi.eyJzdWIi.c2ln-X_1")

        CredentialRedactingFilter().filter(record)

        assert record.getMessage() == f"refresh failed for {REDACTED}"
        assert record.args is None

    def test_leaves_plain_messages_untouched(self):
        record = make_record("login ok for %s", "a@x.com")

        CredentialRedactingFilter().filter(record)

        assert record.msg == "login ok for %s"
        assert record.args == ("a@x.com",)
        assert record.getMessage() == "login ok for a@x.com"
