"""Exception hierarchy for symbol collection.

Fatal errors abort the whole run. Tokenizer errors only stop the scan of the
file being processed; whatever was collected up to that point is kept.
"""


class SymcollectError(Exception):
    """Base class for all symcollect errors."""


class FatalError(SymcollectError):
    """An error that terminates the run."""


class PreprocessorError(FatalError):
    """Raised when the preprocessor cannot be started."""


class FilterError(FatalError):
    """Raised when the symbol filter pattern does not compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid pattern '{pattern}' (error: {reason})")


class InputError(FatalError):
    """Raised when an input file cannot be opened for scanning."""


class OutputError(FatalError):
    """Raised when the output destination cannot be written."""


class ConfigError(FatalError):
    """Raised for unreadable or invalid configuration files."""


class PushbackError(SymcollectError):
    """Raised when pushing back a character while another one is pending."""


class TokenizerError(SymcollectError):
    """A malformed-input failure that truncates the scan of one file."""


class UnterminatedQuoteError(TokenizerError):
    def __init__(self, quote: str):
        self.quote = quote
        super().__init__(f"end of input inside {quote}-quoted text")


class UnbalancedBlockError(TokenizerError):
    def __init__(self, opener: str, depth: int):
        self.opener = opener
        self.depth = depth
        super().__init__(f"end of input inside '{opener}' block (depth {depth})")


class IdentifierTooLongError(TokenizerError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"identifier longer than {limit} characters")


class UnitOverflowError(TokenizerError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"logical unit exceeds {limit} tokens")


class ArenaOverflowError(TokenizerError):
    def __init__(self, capacity: int, needed: int):
        self.capacity = capacity
        self.needed = needed
        super().__init__(f"token arena of {capacity} bytes cannot hold {needed} more bytes")
