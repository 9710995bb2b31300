from copy import deepcopy
from enum import IntEnum
from typing import Dict, Generic, List, TypeVar

import numpy as np

import nlphaseopt.params as pars
from nlphaseopt.exceptions import ScheduleConfigError

T = TypeVar("T")


class EndeffectorID(IntEnum):
    E0 = 0
    E1 = 1
    E2 = 2
    E3 = 3
    E4 = 4
    E5 = 5

    def __str__(self) -> str:
        return self.name


class Endeffectors(Generic[T]):
    """Assigns one value to each endeffector, ordered E0 -> EN.

    Common values are xyz-positions (np.ndarray) or contact flags (bool).
    """

    def __init__(self, n_ee: int = 0, value: T = None):
        self._ee: List[T] = []
        self.set_count(n_ee)
        if value is not None:
            self.set_all(value)

    def set_count(self, n_ee: int) -> None:
        if not 0 <= n_ee <= pars.MAX_EE_COUNT:
            raise ScheduleConfigError(f"Endeffector count must be in [0, {pars.MAX_EE_COUNT}], got {n_ee}")
        self._ee = [None] * n_ee

    def set_all(self, value: T) -> None:
        # copies, so mutable values (arrays) are not shared between feet
        self._ee = [deepcopy(value) for _ in self._ee]

    def get_count(self) -> int:
        return len(self._ee)

    def get_ees_ordered(self) -> List[EndeffectorID]:
        return [EndeffectorID(i) for i in range(self.get_count())]

    def at(self, ee: EndeffectorID) -> T:
        return self._ee[ee]

    def __getitem__(self, ee: EndeffectorID) -> T:
        return self._ee[ee]

    def __setitem__(self, ee: EndeffectorID, value: T) -> None:
        self._ee[ee] = value

    def __iter__(self):
        return iter(self._ee)

    def __len__(self) -> int:
        return len(self._ee)

    def __sub__(self, rhs: "Endeffectors[T]") -> "Endeffectors[T]":
        result = type(self)(self.get_count())
        for ee in self.get_ees_ordered():
            result[ee] = self[ee] - rhs[ee]
        return result

    def __truediv__(self, scalar: float) -> "Endeffectors[T]":
        result = type(self)(self.get_count())
        for ee in self.get_ees_ordered():
            result[ee] = self[ee] / scalar
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, Endeffectors) or self.get_count() != other.get_count():
            return False
        return all(np.array_equal(a, b) for a, b in zip(self._ee, other._ee))

    def __ne__(self, other) -> bool:
        return not self == other

    def to_impl(self) -> List[T]:
        """Read-only copy of the underlying container."""
        return list(self._ee)

    def __str__(self) -> str:
        return ", ".join(str(v) for v in self._ee)


class EndeffectorsBool(Endeffectors[bool]):
    def invert(self) -> "EndeffectorsBool":
        """Copy with flipped contact flags."""
        ret = EndeffectorsBool(self.get_count())
        for ee in self.get_ees_ordered():
            ret[ee] = not self[ee]
        return ret

    def get_true_count(self) -> int:
        return sum(1 for flag in self if flag)


EndeffectorsPos = Endeffectors[np.ndarray]
EndeffectorsVel = EndeffectorsPos


class BipedFootID(IntEnum):
    L = 0
    R = 1


class QuadFootID(IntEnum):
    RF = 0
    LF = 1
    LH = 2
    RH = 3


BIPED_MAP: Dict[EndeffectorID, BipedFootID] = {
    EndeffectorID.E0: BipedFootID.L,
    EndeffectorID.E1: BipedFootID.R,
}

QUAD_MAP: Dict[EndeffectorID, QuadFootID] = {
    EndeffectorID.E0: QuadFootID.LH,
    EndeffectorID.E1: QuadFootID.LF,
    EndeffectorID.E2: QuadFootID.RH,
    EndeffectorID.E3: QuadFootID.RF,
}


def reverse(mapping: Dict) -> Dict:
    return {value: key for key, value in mapping.items()}
