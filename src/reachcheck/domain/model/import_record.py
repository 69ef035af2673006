"""Import record entity."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from reachcheck.domain.model.enums import ImportStyle, ModuleSystem

if TYPE_CHECKING:
    from reachcheck.domain.model.location import Location

# Forms binding the whole module object; members are not statically enumerable
_WHOLE_MODULE_STYLES = frozenset({ImportStyle.DEFAULT, ImportStyle.NAMESPACE, ImportStyle.DYNAMIC})


@dataclass(frozen=True, slots=True)
class ImportRecord:
    """One import occurrence in one source file.

    Represents:
    - import { a, b as c } from 'm'     (NAMED, named_bindings=(a, b), aliases={b: c})
    - import d from 'm'                 (DEFAULT, local_name=d)
    - import * as ns from 'm'           (NAMESPACE, local_name=ns)
    - import 'm'                        (SIDE_EFFECT)
    - import('m')                       (DYNAMIC)
    - const { a } = require('m')        (SYNC_LOAD, named_bindings=(a,))
    - require('m').a()                 (SYNC_LOAD, named_bindings=(a,), is_inline=True)
    - export { a } from 'm'             (NAMED, is_reexport=True)
    - export * from 'm'                 (NAMESPACE, is_reexport=True)

    Attributes:
        module: Module specifier exactly as written ('lodash', './utils', '@scope/pkg/sub')
        style: Syntactic import form
        location: Source location of the statement or call
        named_bindings: Original exported names bound by this occurrence
        aliases: Original name -> local alias (only for renamed bindings)
        local_name: Whole-module local binding (default, namespace, require result)
        is_type_only: Erased before runtime (import type ...)
        is_side_effect_only: No identifier is bound
        is_conditional: Inside a branch body (if/else, try/catch, switch case, ternary arm)
        is_reexport: Re-export declaration (export ... from 'm')
        is_inline: Member read in place on the load expression; binds no identifier
    """

    module: str
    style: ImportStyle
    location: Location
    named_bindings: tuple[str, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    local_name: str | None = None
    is_type_only: bool = False
    is_side_effect_only: bool = False
    is_conditional: bool = False
    is_reexport: bool = False
    is_inline: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.module:
            raise ValueError("import module must not be empty")

        if self.location is None:
            raise TypeError("location must not be None")

        if not isinstance(self.style, ImportStyle):
            raise TypeError(f"style must be ImportStyle, got {type(self.style).__name__}")

        if any(not name for name in self.named_bindings):
            raise ValueError("named bindings must be non-empty strings")

        unknown = set(self.aliases) - set(self.named_bindings)
        if unknown:
            raise ValueError(f"aliases reference names not in named_bindings: {sorted(unknown)}")

        if self.local_name is not None and self.local_name == "":
            raise ValueError("local_name must be non-empty string or None")

        if self.style is ImportStyle.SIDE_EFFECT and not self.is_side_effect_only:
            raise ValueError("SIDE_EFFECT style requires is_side_effect_only")

        if self.is_side_effect_only and (self.named_bindings or self.local_name is not None):
            raise ValueError("side-effect-only import must not bind identifiers")

        flags = ("is_type_only", "is_side_effect_only", "is_conditional", "is_reexport", "is_inline")
        for flag in flags:
            if not isinstance(getattr(self, flag), bool):
                raise TypeError(f"{flag} must be bool")

        if self.is_inline and (len(self.named_bindings) != 1 or self.local_name is not None):
            raise ValueError("inline access must name exactly one member and no local binding")

        # Freeze caller-provided dicts
        if not isinstance(self.aliases, MappingProxyType):
            object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))

    @property
    def is_relative(self) -> bool:
        """Module specifier points at a local file ('./x', '../x')."""
        return self.module.startswith(("./", "../")) or self.module in (".", "..")

    @property
    def is_whole_module(self) -> bool:
        """Binding captures the entire module; used members need property scanning."""
        if self.style in _WHOLE_MODULE_STYLES:
            return True
        # Whole require() result, or a destructuring too complex to enumerate
        return (
            self.style is ImportStyle.SYNC_LOAD
            and not self.named_bindings
            and not self.is_side_effect_only
        )

    @property
    def module_system(self) -> ModuleSystem:
        """Module system implied by the import form."""
        match self.style:
            case ImportStyle.DYNAMIC:
                return ModuleSystem.DYNAMIC
            case ImportStyle.SYNC_LOAD:
                return ModuleSystem.COMMONJS
            case _:
                return ModuleSystem.ESM

    def local_for(self, name: str) -> str:
        """Local identifier a named binding is visible under."""
        return self.aliases.get(name, name)

    @property
    def local_bindings(self) -> tuple[str, ...]:
        """All local identifiers this occurrence introduces into the file scope.

        Re-export declarations and inline member reads introduce none.
        """
        if self.is_reexport or self.is_inline:
            return ()
        names = [self.local_for(name) for name in self.named_bindings]
        if self.local_name is not None and self.local_name not in names:
            names.append(self.local_name)
        return tuple(names)
