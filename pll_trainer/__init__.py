from pll_trainer.engine import (
    ApplyResult,
    IdentityResult,
    ParsedAlg,
    ParseError,
    apply_to_case,
    invert,
    is_identity,
    parse,
    simplify_steps,
    to_steps,
)
