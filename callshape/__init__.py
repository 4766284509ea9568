from ._config import (
    get_max_parameters,
    set_max_parameters,
    get_warn_threshold,
    set_warn_threshold,
)
from ._dispatch import (
    AcceptorPattern,
    DispatchRule,
    DispatchTable,
    build_table,
    dispatch,
    render_source,
)
from ._exceptions import (
    CallshapeError,
    ImmutableInstanceError,
    InvariantViolation,
    LimitExceededError,
    NoMatchError,
    ParameterOrderError,
)
from ._marker import (
    empty,
    rest,
    zero,
)
from ._parameter import (
    Factory,
    Parameter,
    dflt,
    first_invalid_parameter,
    req,
    split_parameters,
    validate,
)
from ._permute import (
    permute,
    permute_declaration,
    permute_tuple,
)
from ._resolve import (
    canonical_order,
    reference_variant,
)
from ._signature import (
    CallableKind,
    Declaration,
    declaration,
)
from ._utils import CallArguments
from ._variant import (
    CallVariant,
    Slot,
    SlotKind,
)
