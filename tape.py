class Tape:
    """Fixed-length row of unsigned 8-bit cells with a wrapping cursor."""

    def __init__(self, length: int):
        if length < 1:
            length = 1
        self._cells = bytearray(length)  # zero-filled
        self.pos = 0

    def __len__(self):
        return len(self._cells)

    @property
    def cells(self) -> bytes:
        return bytes(self._cells)

    def move_right(self):
        # past the end: back to the first cell, the tape never grows
        if self.pos + 1 >= len(self._cells):
            self.pos = 0
        else:
            self.pos += 1

    def move_left(self):
        if self.pos == 0:
            self.pos = len(self._cells) - 1
        else:
            self.pos -= 1

    def increment(self):
        value = self._cells[self.pos]
        self._cells[self.pos] = 0 if value == 255 else value + 1

    def decrement(self):
        value = self._cells[self.pos]
        self._cells[self.pos] = 255 if value == 0 else value - 1

    def read_cell(self) -> int:
        return self._cells[self.pos]

    def write_cell(self, value: int):
        self._cells[self.pos] = value & 0xFF

    def __repr__(self):
        return f"Tape(len={len(self._cells)}, pos={self.pos})"
