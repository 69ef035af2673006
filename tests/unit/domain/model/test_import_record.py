"""Tests for domain/model/import_record.py."""

import pytest

from reachcheck.domain.model.enums import ImportStyle, ModuleSystem
from reachcheck.domain.model.import_record import ImportRecord
from tests.factories import make_location, make_record


class TestImportRecordCreation:
    """Tests for valid ImportRecord creation."""

    def test_defaults(self) -> None:
        record = ImportRecord(module="lodash", style=ImportStyle.NAMED, location=make_location())
        assert record.named_bindings == ()
        assert dict(record.aliases) == {}
        assert record.local_name is None
        assert record.is_type_only is False
        assert record.is_reexport is False

    def test_aliases_frozen(self) -> None:
        aliases = {"merge": "m"}
        record = make_record("lodash", named=("merge",), aliases=aliases)
        aliases["merge"] = "changed"

        assert record.aliases["merge"] == "m"
        with pytest.raises(TypeError):
            record.aliases["merge"] = "x"  # type: ignore[index]

    def test_is_frozen(self) -> None:
        record = make_record("lodash")
        with pytest.raises(AttributeError):
            record.module = "react"  # type: ignore[misc]


class TestImportRecordFailFirst:
    """Tests for FAIL-FIRST validation in ImportRecord."""

    def test_empty_module_raises(self) -> None:
        with pytest.raises(ValueError, match="module must not be empty"):
            make_record("")

    def test_invalid_style_raises(self) -> None:
        with pytest.raises(TypeError, match="ImportStyle"):
            ImportRecord(module="a", style="named", location=make_location())  # type: ignore[arg-type]

    def test_empty_binding_raises(self) -> None:
        with pytest.raises(ValueError, match="named bindings"):
            make_record("lodash", named=("",))

    def test_alias_for_unknown_name_raises(self) -> None:
        with pytest.raises(ValueError, match="aliases reference"):
            make_record("lodash", named=("merge",), aliases={"clone": "c"})

    def test_empty_local_name_raises(self) -> None:
        with pytest.raises(ValueError, match="local_name"):
            make_record("lodash", ImportStyle.DEFAULT, local_name="")

    def test_side_effect_style_requires_flag(self) -> None:
        with pytest.raises(ValueError, match="SIDE_EFFECT"):
            ImportRecord(module="a", style=ImportStyle.SIDE_EFFECT, location=make_location())

    def test_side_effect_cannot_bind(self) -> None:
        with pytest.raises(ValueError, match="must not bind"):
            make_record("a", ImportStyle.SYNC_LOAD, local_name="a", is_side_effect_only=True)

    def test_non_bool_flag_raises(self) -> None:
        with pytest.raises(TypeError, match="is_conditional"):
            ImportRecord(
                module="a",
                style=ImportStyle.NAMED,
                location=make_location(),
                is_conditional=1,  # type: ignore[arg-type]
            )


class TestImportRecordProperties:
    """Tests for derived properties."""

    @pytest.mark.parametrize("module", ["./utils", "../lib", ".", "..", "./a/b.js"])
    def test_relative(self, module: str) -> None:
        assert make_record(module).is_relative is True

    @pytest.mark.parametrize("module", ["lodash", "@scope/pkg", ".hidden", "node:fs"])
    def test_not_relative(self, module: str) -> None:
        assert make_record(module).is_relative is False

    @pytest.mark.parametrize(
        ("style", "system"),
        [
            (ImportStyle.NAMED, ModuleSystem.ESM),
            (ImportStyle.DEFAULT, ModuleSystem.ESM),
            (ImportStyle.NAMESPACE, ModuleSystem.ESM),
            (ImportStyle.SIDE_EFFECT, ModuleSystem.ESM),
            (ImportStyle.SYNC_LOAD, ModuleSystem.COMMONJS),
            (ImportStyle.DYNAMIC, ModuleSystem.DYNAMIC),
        ],
    )
    def test_module_system(self, style: ImportStyle, system: ModuleSystem) -> None:
        assert make_record("m", style).module_system is system

    def test_whole_module_forms(self) -> None:
        assert make_record("m", ImportStyle.DEFAULT, local_name="m").is_whole_module is True
        assert make_record("m", ImportStyle.NAMESPACE, local_name="m").is_whole_module is True
        assert make_record("m", ImportStyle.DYNAMIC).is_whole_module is True
        assert make_record("m", ImportStyle.SYNC_LOAD, local_name="m").is_whole_module is True

    def test_not_whole_module_forms(self) -> None:
        assert make_record("m", named=("a",)).is_whole_module is False
        assert make_record("m", ImportStyle.SYNC_LOAD, named=("a",)).is_whole_module is False
        assert make_record("m", ImportStyle.SIDE_EFFECT).is_whole_module is False
        side_effect_require = make_record("m", ImportStyle.SYNC_LOAD, is_side_effect_only=True)
        assert side_effect_require.is_whole_module is False

    def test_local_for(self) -> None:
        record = make_record("lodash", named=("merge", "clone"), aliases={"merge": "m"})

        assert record.local_for("merge") == "m"
        assert record.local_for("clone") == "clone"

    def test_local_bindings(self) -> None:
        record = make_record(
            "react", ImportStyle.DEFAULT, named=("useState",), aliases={"useState": "us"}, local_name="React"
        )

        assert record.local_bindings == ("us", "React")

    def test_reexport_binds_nothing_locally(self) -> None:
        record = make_record("lodash", named=("merge",), is_reexport=True)

        assert record.local_bindings == ()

    def test_inline_member_binds_nothing_locally(self) -> None:
        record = make_record("dotenv", ImportStyle.SYNC_LOAD, named=("config",), is_inline=True)

        assert record.local_bindings == ()

    def test_inline_with_two_members_raises(self) -> None:
        with pytest.raises(ValueError, match="inline"):
            make_record("lodash", ImportStyle.SYNC_LOAD, named=("a", "b"), is_inline=True)
