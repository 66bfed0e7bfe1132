"""EVM execution trace normalizer and gas report renderer."""

from .api import (  # noqa: F401
    annotate_trace,
    gasspect,
    gasspect_evm,
    parse_struct_logs,
    profile_evm,
)
from .counter import count_instructions, count_opcodes, count_opcodes_exact  # noqa: F401
from .errors import (  # noqa: F401
    FetchFailure,
    GasspectError,
    PersistFailure,
    TraceMalformed,
)
from .report import GasspectConfig  # noqa: F401
from .trace_source import (  # noqa: F401
    JsonFileTraceSource,
    Web3TraceSource,
    get_trace_source,
)
