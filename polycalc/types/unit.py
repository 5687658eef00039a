from __future__ import annotations


class UnitType:
    """The single value of the null domain. Also terminates pair lists."""
    __slots__ = ()
    _instance: UnitType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "null"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, UnitType)

    def __hash__(self):
        return hash(UnitType)


Unit = UnitType()
