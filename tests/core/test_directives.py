"""Tests for directive metadata and field descriptors."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

import pytest
from envbind.core.binder import bind
from envbind.core.coercion import FieldKind
from envbind.core.directives import Directives, describe, env_field


@dataclass
class Inner:
    host: str = env_field("HOST", initial="")


@dataclass
class Outer:
    port: int = env_field("PORT", required=True, default=8080, initial=0)
    inner: Inner = field(default_factory=Inner)
    debug: bool = env_field("DEBUG", initial=False)
    plain: str = ""


class TestDirectivesFromMetadata:
    """Test reading the three directives."""

    def test_from_metadata_reads_all_directives(self):
        result = Directives.from_metadata({"env": "PORT", "required": "true", "default": "8080"})

        assert result == Directives(source="PORT", required=True, default="8080")

    def test_from_metadata_missing_keys_mean_not_set(self):
        result = Directives.from_metadata({})

        assert result == Directives(source=None, required=False, default=None)

    @pytest.mark.parametrize("flag", ["True", "yes", "1", "false", ""])
    def test_from_metadata_only_literal_true_is_required(self, flag):
        assert Directives.from_metadata({"env": "X", "required": flag}).required is False


class TestEnvField:
    """Test the env_field helper."""

    def test_env_field_stores_string_directives(self):
        # Act
        f = env_field("PORT", required=True, default=8080, initial=0)

        # Assert
        assert dict(f.metadata) == {"env": "PORT", "required": "true", "default": "8080"}
        assert f.default == 0

    def test_env_field_omits_unset_directives(self):
        # Act
        f = env_field("PORT", metadata={"doc": "listen port"})

        # Assert
        assert dict(f.metadata) == {"doc": "listen port", "env": "PORT"}
        assert f.default is dataclasses.MISSING

    def test_env_field_rejects_initial_and_factory_together(self):
        with pytest.raises(ValueError):
            env_field("X", initial="", default_factory=str)


class TestDescribe:
    """Test descriptor tables built from dataclass declarations."""

    def test_describe_preserves_declaration_order_and_kinds(self):
        # Act
        descriptors = describe(Outer)

        # Assert
        assert [d.name for d in descriptors] == ["port", "inner", "debug", "plain"]
        assert descriptors[0].kind is FieldKind.INTEGER
        assert descriptors[0].directives.required is True
        assert descriptors[1].is_record is True
        assert descriptors[1].kind is None
        assert descriptors[2].kind is None
        assert descriptors[2].kind_name == "bool"
        assert descriptors[3].kind is FieldKind.TEXT
        assert descriptors[3].directives.source is None

    def test_describe_resolves_postponed_annotations(self):
        # Module uses postponed annotations; types must still be resolved
        assert describe(Outer)[0].annotation is int

    def test_describe_is_cached_per_type(self):
        assert describe(Outer) is describe(Outer)


class TestDescribeLocalRecords:
    """Test records declared inside functions under postponed annotations."""

    def test_describe_local_nested_record_still_resolves_scalars(self):
        """A local nested class cannot be resolved, but int/str fields still are."""

        # Arrange
        @dataclass
        class Db:
            host: str = env_field("DB_HOST", initial="")

        @dataclass
        class Root:
            port: int = env_field("PORT", initial=0)
            db: Db = field(default_factory=Db)

        # Act
        descriptors = describe(Root)

        # Assert
        assert descriptors[0].annotation is int
        assert descriptors[0].kind is FieldKind.INTEGER
        assert descriptors[1].annotation == "Db"
        assert descriptors[1].kind is None

    def test_bind_local_nested_record_binds_scalars_and_nested_fields(self):
        """Binding works end to end when the nested record is a local class."""

        # Arrange
        @dataclass
        class Db:
            host: str = env_field("DB_HOST", initial="")

        @dataclass
        class Root:
            port: int = env_field("PORT", initial=0)
            db: Db = field(default_factory=Db)

        cfg = Root()

        # Act
        bind(cfg, {"PORT": "8080", "DB_HOST": "localhost"})

        # Assert
        assert cfg.port == 8080
        assert cfg.db.host == "localhost"
