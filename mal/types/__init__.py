from mal.types.symbol import Symbol
from mal.types.nil import Nil, NilType
from mal.types.functions import Closure, NativeFunction, SpecialForm
from mal.types.values import HashMap, List, Vector, is_number, values_equal
from mal.types.environment import Environment, Scope

__all__ = (
    "Symbol",
    "Nil",
    "NilType",
    "Closure",
    "NativeFunction",
    "SpecialForm",
    "HashMap",
    "List",
    "Vector",
    "is_number",
    "values_equal",
    "Environment",
    "Scope",
)
