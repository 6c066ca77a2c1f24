import enum


class Level(enum.Enum):
    HINT = 1
    WARN = 2  # overload finding
    ERROR = 3  # analysis of a file failed

    def __str__(self) -> str:
        return self.name.lower()
