class LangMustacheError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(LangMustacheError):
    # errors related to configuration.
    pass

class TemplateError(LangMustacheError):
    # errors related to template input (empty text, unreadable files).
    pass

class TemplateSyntaxError(TemplateError):
    # malformed tags found while compiling a template.
    def __init__(self, message: str, line: int | None = None):
        super().__init__(message if line is None else f"{message} @[line {line}]")
        self.line = line

class ParamsError(LangMustacheError):
    # errors loading or validating render parameters.
    pass

class OutputError(LangMustacheError):
    # errors during output operations.
    pass
