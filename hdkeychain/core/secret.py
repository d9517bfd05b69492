"""
SecretBytes - a mutable buffer for secret material that can be wiped

Seeds, entropy and private scalars are held in a bytearray so the backing memory can be overwritten with zeros. Use
it as a context manager to guarantee the wipe on every exit path:

    with derive_seed(mnemonic) as seed:
        master = master_from_seed(seed)

Copies handed out by bytes() or reveal() are ordinary immutable bytes and are outside our control. Keep them local.
"""
import hmac

from hdkeychain.core.exceptions import SecretWipedError

__all__ = ["SecretBytes"]


class SecretBytes:
    __slots__ = ("_buffer", "_wiped")

    def __init__(self, data: bytes | bytearray | memoryview):
        self._buffer = bytearray(data)
        self._wiped = False

    # --- OVERRIDES --- #

    def __len__(self) -> int:
        return len(self._buffer)

    def __bytes__(self) -> bytes:
        return self.reveal()

    def __eq__(self, other) -> bool:
        """
        Constant time comparison against another SecretBytes or a bytes-like object
        """
        if isinstance(other, SecretBytes):
            other = other.reveal()
        if not isinstance(other, (bytes, bytearray, memoryview)):
            return NotImplemented
        return hmac.compare_digest(self.reveal(), bytes(other))

    # Mutable and secret: never usable as a dict key
    __hash__ = None

    def __repr__(self) -> str:
        state = "wiped" if self._wiped else f"{len(self._buffer)} bytes"
        return f"SecretBytes(<{state}>)"

    __str__ = __repr__

    def __enter__(self) -> "SecretBytes":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe()

    def __del__(self):
        self.wipe()

    # --- PROPERTIES --- #

    @property
    def wiped(self) -> bool:
        return self._wiped

    # --- METHODS --- #

    def reveal(self) -> bytes:
        """
        Returns an immutable copy of the secret. Raises SecretWipedError once wiped.
        """
        if self._wiped:
            raise SecretWipedError("Secret material has been wiped")
        return bytes(self._buffer)

    def to_int(self) -> int:
        return int.from_bytes(self.reveal(), "big")

    def hex(self) -> str:
        return self.reveal().hex()

    def copy(self) -> "SecretBytes":
        """
        Independent copy with its own buffer, wiped separately
        """
        return SecretBytes(self.reveal())

    def wipe(self) -> None:
        """
        Overwrite the buffer with zeros. Safe to call more than once.
        """
        buffer = getattr(self, "_buffer", None)
        if buffer is None:
            return
        for i in range(len(buffer)):
            buffer[i] = 0
        self._wiped = True
