from kappa.types.symbol import Symbol, Keyword
from kappa.types.nil import Nil, NilType
from kappa.types.char import Char
from kappa.types.vector import Vector
from kappa.types.hash_map import Map
from kappa.types.environment import Environment
from kappa.types.procedure import Procedure
from kappa.types.builtin_fn import Primitive, SpecialForm
from kappa.types.native_fn import NativeFunction
from kappa.types.tail_call import TailCall

__all__ = [
    "Symbol",
    "Keyword",
    "Nil",
    "NilType",
    "Char",
    "Vector",
    "Map",
    "Environment",
    "Procedure",
    "Primitive",
    "SpecialForm",
    "NativeFunction",
    "TailCall",
]
