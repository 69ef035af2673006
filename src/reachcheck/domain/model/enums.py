"""Domain enumerations.

Values of output-facing enums are stable strings consumed by downstream
formatters; never rename them.
"""

from enum import Enum, auto


class ImportStyle(Enum):
    """Syntactic form of an import occurrence."""

    NAMED = auto()  # import { a } from 'm'
    DEFAULT = auto()  # import a from 'm'
    NAMESPACE = auto()  # import * as a from 'm'
    SIDE_EFFECT = auto()  # import 'm'
    DYNAMIC = auto()  # import('m')
    SYNC_LOAD = auto()  # require('m')


class ModuleSystem(Enum):
    """Module system a component is loaded through."""

    ESM = "esm"
    COMMONJS = "commonjs"
    DYNAMIC = "dynamic"


class ReachabilityStatus(Enum):
    """Per-component verdict."""

    NOT_REACHABLE = "not_reachable"
    IMPORTED = "imported"
    REACHABLE = "reachable"
    INDIRECT = "indirect"
    UNKNOWN = "unknown"


class Confidence(Enum):
    """How directly the evidence supports a verdict."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WarningCode(Enum):
    """Stable analysis warning codes."""

    DYNAMIC_IMPORT = "dynamic_import"
    NAMESPACE_IMPORT = "namespace_import"
    UNUSED_IMPORT = "unused_import"
    BARREL_FILE = "barrel_file"
    MAX_DEPTH_REACHED = "max_depth_reached"
    TYPE_ONLY_IMPORT = "type_only_import"
    SIDE_EFFECT_IMPORT = "side_effect_import"
    INDIRECT_USAGE = "indirect_usage"
    DYNAMIC_CODE = "dynamic_code"
    CONDITIONAL_IMPORT = "conditional_import"


class WarningSeverity(Enum):
    """Analysis warning severity."""

    INFO = "info"
    WARNING = "warning"


class DynamicCodeKind(Enum):
    """Runtime code-execution construct found in a file."""

    EVAL = "eval"
    FUNCTION_CONSTRUCTOR = "Function"
    INDIRECT_EVAL = "indirect_eval"
    SET_TIMEOUT_STRING = "setTimeout_string"
    SET_INTERVAL_STRING = "setInterval_string"


class BindingState(Enum):
    """Usage classification of one imported local binding."""

    CALLED = auto()
    REFERENCED_ONLY = auto()
    UNUSED = auto()


class WorkspaceKind(Enum):
    """Monorepo workspace manager."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    LERNA = "lerna"
    NX = "nx"
    TURBOREPO = "turborepo"
    UNKNOWN = "unknown"


class VulnerabilitySeverity(Enum):
    """Advisory severity as reported by the vulnerability source."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"
