"""Exception types shared across Skill Audit."""


class SkillAuditError(Exception):
    """Base class for errors that abort an audit."""

    pass


class SkillRootError(SkillAuditError):
    """Raised when a configured skill root exists but cannot be listed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read skill directory '{path}': {reason}")


class CommandError(SkillAuditError):
    """Raised when an external command cannot be run or times out."""

    pass
