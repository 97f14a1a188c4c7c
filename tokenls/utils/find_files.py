from pathlib import Path

# Checked in order; the first existing file wins
CATALOG_FILE_NAMES = [
    "design-tokens.yml",
    "design-tokens.yaml",
    "design-tokens.json",
    ".tokenls/tokens.yml",
    ".tokenls/tokens.json",
]

# Directories commonly holding a project's style sources
COMMON_LOCATIONS = ["", "src", "styles", "tokens"]


def find_catalog_file(workspace_root: Path) -> Path | None:
    """
    Find a project-specific token catalog within a workspace.

    Looks for the known catalog file names in the workspace root and in a
    few conventional style directories.

    Args:
        workspace_root: The workspace root path

    Returns:
        Path to the catalog file, or None if the workspace has none
    """
    if not workspace_root.is_dir():
        return None

    for location in COMMON_LOCATIONS:
        base = workspace_root / location if location else workspace_root
        for file_name in CATALOG_FILE_NAMES:
            candidate = base / file_name
            if is_catalog_file(candidate):
                return candidate

    return None


def is_catalog_file(path: Path) -> bool:
    """Check if a path is a readable YAML or JSON file."""
    if not path.is_file():
        return False

    return path.suffix.lower() in (".yml", ".yaml", ".json")
