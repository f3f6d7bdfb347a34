import os


def getenv(key, default):
    value = os.getenv(key, default)
    if value is None:
        value = default
    elif type(value) == str:
        if len(value) == 0:
            value = default
    return value


def getflag(key, default: str = "true"):
    return getenv(key, default) == "true"


def align(code_doc: str):
    code_split = code_doc.split("\n")
    spaces = code_split.pop()
    return "\n".join([line.replace(spaces, "", 1) for line in code_split])
