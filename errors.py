class BfError(Exception):
    pass


class SourceLoadError(BfError):
    def __init__(self, path: str, stage: str, reason: str):
        super().__init__(reason)
        self.path = path
        self.stage = stage  # open / seek / size / read
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.stage}: {self.reason}"


class BracketError(BfError):
    def __init__(self, kind: str, index: int):
        super().__init__(kind, index)
        self.kind = kind  # "open" or "close"
        self.index = index

    def __str__(self) -> str:
        bracket = "[" if self.kind == "open" else "]"
        return f"Unmatched '{bracket}' at {self.index}"


class BfRuntimeError(BfError):
    def __init__(self, message: str, ip: int | None = None):
        super().__init__(message)
        self.message = message
        self.ip = ip

    def format(self, indent: str = "") -> str:
        lines = [f"{indent}Runtime error: {self.message}"]
        if self.ip is not None:
            lines.append(f"{indent}  ip={self.ip:04d}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format()
