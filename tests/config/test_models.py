"""Tests for configuration section models."""

import pytest
from pydantic import ValidationError

from pwctl.config.models import CoreConfig, GenerateConfig, RuleSpec, StoreConfig


class TestSections:
    def test_generate_defaults(self) -> None:
        config = GenerateConfig()
        assert config.length == 0
        assert config.symbols is None
        assert config.separator == " "
        assert config.lang == "en"

    def test_store_defaults(self) -> None:
        assert StoreConfig().path is None
        assert StoreConfig().template_name == ".pwctl-template"

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            CoreConfig().autoclip = True  # type: ignore[misc]


class TestRuleSpec:
    def test_requires_bounds(self) -> None:
        with pytest.raises(ValidationError):
            RuleSpec.model_validate({"min_length": 8})

    def test_dump_excludes_unset_optionals(self) -> None:
        spec = RuleSpec(min_length=8, max_length=16)
        assert spec.model_dump(exclude_none=True) == {"min_length": 8, "max_length": 16}
