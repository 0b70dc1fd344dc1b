"""Step-by-step string matching traces (Naive, KMP, Rabin-Karp) and their replay."""

from .api import (  # noqa: F401
    generate_trace,
    count_comparisons,
    build_prefix_table,
    dump_trace,
    dump_trace_json,
    describe_algorithm,
)
from .errors import (  # noqa: F401
    MatchTraceError,
    InvalidInputError,
    UnsupportedAlgorithmError,
    PlaybackError,
)
from .sequencer import StepSequencer  # noqa: F401
from .trace_types import Algorithm, StepOutcome, Step, Trace  # noqa: F401
