from pathlib import Path
from typing import Dict

# Mapping of file extensions to editor filetypes
EXTENSION_FILETYPES: Dict[str, str] = {
    ".adoc": "asciidoc",
    ".asciidoc": "asciidoc",
    ".eml": "mail",
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": "text",
    ".tex": "tex",
    ".rst": "rst",
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".go": "go",
}

# Whole file names that carry their own filetype
NAME_FILETYPES: Dict[str, str] = {
    "COMMIT_EDITMSG": "gitcommit",
    "MERGE_MSG": "gitcommit",
    "TAG_EDITMSG": "gittag",
}


def detect_filetype(path: Path) -> str:
    """
    Guess the filetype of a file from its name.

    Returns:
        Filetype name, or "" when unknown
    """
    path = Path(path)
    if path.name in NAME_FILETYPES:
        return NAME_FILETYPES[path.name]
    return EXTENSION_FILETYPES.get(path.suffix.lower(), "")
