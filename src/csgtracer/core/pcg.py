# core/pcg.py

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF
_MULTIPLIER = 6364136223846793005


class PCG:
    """
    Permuted congruential generator (PCG32, XSH-RR variant).

    Each render band or worker owns its own instance; nothing here is global,
    so two generators built from the same seeds produce the same stream.
    """
    __slots__ = ("state", "inc")

    def __init__(self, init_state: int = 42, init_seq: int = 54):
        self.state = 0
        self.inc = ((init_seq << 1) | 1) & _MASK64
        self.random()
        self.state = (self.state + init_state) & _MASK64
        self.random()

    def random(self) -> int:
        """
        Advance the generator and return an unsigned 32-bit integer.
        """
        oldstate = self.state
        self.state = (oldstate * _MULTIPLIER + self.inc) & _MASK64
        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & _MASK32
        rot = oldstate >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _MASK32

    def random_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self.random() / 4294967296.0

    def __repr__(self) -> str:
        return f"PCG(state={self.state}, inc={self.inc})"
