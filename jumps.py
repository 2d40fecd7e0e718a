from errors import BracketError

OPEN = ord("[")
CLOSE = ord("]")


class JumpTable:
    def __init__(self, size: int):
        self.size = size     # length of the source this table indexes
        self.targets = {}    # bracket index -> partner index

    def link(self, open_idx: int, close_idx: int):
        self.targets[open_idx] = close_idx
        self.targets[close_idx] = open_idx

    def target(self, index: int) -> int:
        # only bracket positions have an entry
        return self.targets[index]

    def pairs(self):
        for idx in sorted(self.targets):
            partner = self.targets[idx]
            if partner > idx:
                yield idx, partner

    def __len__(self):
        return self.size

    def __contains__(self, index):
        return index in self.targets


def build_jump_table(source: bytes) -> JumpTable:
    table = JumpTable(len(source))
    stack = []  # pending '[' indices, innermost last

    for i, byte in enumerate(source):
        if byte == OPEN:
            stack.append(i)
        elif byte == CLOSE:
            if not stack:
                raise BracketError("close", i)
            table.link(stack.pop(), i)

    if stack:
        raise BracketError("open", stack[-1])
    return table
