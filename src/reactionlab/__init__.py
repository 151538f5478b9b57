from .presets import (
    build_snelson_prism,
    build_quadruple_prism,
    build_quintuple_prism,
    build_two_pin_bar,
)
from .reactions import (
    DimensionMismatch,
    ReactionError,
    SingularSystem,
    UnderConstrained,
    get_reaction_forces,
)
from .model import StructureModel, solve_reactions

__all__ = [
    "build_snelson_prism",
    "build_quadruple_prism",
    "build_quintuple_prism",
    "build_two_pin_bar",
    "DimensionMismatch",
    "ReactionError",
    "SingularSystem",
    "UnderConstrained",
    "get_reaction_forces",
    "StructureModel",
    "solve_reactions",
]
