class ToolError(Exception):
    pass


class UnknownToolError(ToolError):
    def __init__(self, name):
        super().__init__("unknown tool: {}".format(name))
        self.name = name


class ToolArgumentsError(ToolError):
    def __init__(self, name, errors):
        super().__init__("invalid arguments for {}: {}".format(name, errors))
        self.name = name
        self.errors = errors
