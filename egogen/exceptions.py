class EgoError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(EgoError):
    # errors related to configuration.
    pass

class ManifestError(EgoError):
    # errors while loading a block manifest.
    pass

class OutputError(EgoError):
    # errors during output operations.
    pass

class PackageNameRequiredError(EgoError):
    # the package has no name, nothing can be generated.
    def __init__(self):
        super().__init__("package name required")

class DeclarationRequiredError(EgoError):
    # a template has no declaration block.
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"template: {path}: declaration block required")

class HeaderParseError(EgoError):
    """Raised when the merged header text is not a valid import-only file.

    `source` holds the concatenated header text so callers can show exactly
    what was handed to the import parser.
    """
    def __init__(self, message: str, source: str):
        self.message = message
        self.source = source
        super().__init__(f"writeHeader: {message}")

class LiteralNotAssignedError(EgoError):
    # a text block was rendered without a literal id from the package pass.
    def __init__(self, content: str):
        self.content = content
        super().__init__(f"text block has no literal id: {content[:40]!r}")
