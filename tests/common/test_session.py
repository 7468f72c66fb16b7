"""Tests for pos_catalog/common/session.py"""

import dataclasses

import pytest

from pos_catalog.common import Session


class TestSession:
    def test_requires_tenant_and_industry(self):
        with pytest.raises(ValueError, match="tenant_id"):
            Session(tenant_id="", industry_id="fashion")
        with pytest.raises(ValueError, match="industry_id"):
            Session(tenant_id="t1", industry_id="")

    def test_is_immutable(self, session):
        with pytest.raises(dataclasses.FrozenInstanceError):
            session.tenant_id = "other"

    def test_from_settings(self):
        settings = {"session": {"tenant_id": "t9", "industry_id": "spa", "user_id": "u2"}}
        s = Session.from_settings(settings)
        assert (s.tenant_id, s.industry_id, s.user_id, s.role) == ("t9", "spa", "u2", "")

    def test_from_settings_without_section(self):
        with pytest.raises(ValueError):
            Session.from_settings({})

    def test_from_default_settings(self):
        s = Session.from_settings()
        assert s.tenant_id
        assert s.industry_id
