import json
from pathlib import Path

from pydantic import BaseModel

from dir_navigator_mcp.models.tree import DirectoryNode


def format_directory_node(node: DirectoryNode, root: Path | None = None) -> str:
    """
    Format a directory snapshot as structured JSON for LLM consumption.

    Paths are shown relative to ``root`` when one is given so the output does
    not repeat the absolute prefix on every line.
    """
    def display(path: Path) -> str:
        if root is None:
            return str(path)
        try:
            relative = path.relative_to(root)
        except ValueError:
            return str(path)
        return "." if relative == Path(".") else str(relative)

    if not node.children and not node.degraded:
        return json.dumps({
            "status": "empty",
            "directory": display(node.path),
            "message": "Directory is empty",
            "entries": []
        }, indent=2)

    entries = []
    for entry in node.children:
        item = {
            "name": entry.name,
            "type": entry.kind.value,
            "path": display(entry.path),
        }
        if entry.is_symlink:
            item["symlink"] = True
        entries.append(item)

    output = {
        "status": "success",
        "directory": display(node.path),
        "count": len(entries),
        "entries": entries,
    }
    # Unreadable children are reported, never dropped
    if node.degraded:
        output["degraded"] = [
            {"name": d.name, "path": display(d.path), "reason": d.reason}
            for d in node.degraded
        ]
    return json.dumps(output, indent=2)


def format_outcome(outcome: BaseModel) -> str:
    """Format a controller outcome as a one-line human readable message."""
    data = outcome.model_dump(mode="json")
    if "entered_directory" in data:
        return f"Entered directory {data['entered_directory']}"
    if "file_to_view" in data:
        return f"Open requested for file {data['file_to_view']}"
    if "new_directory" in data:
        return f"Current directory is now {data['new_directory']}"
    if data.get("no_history"):
        return "No previous directory"
    if data.get("at_root"):
        return "Already at the root directory"
    if "created" in data:
        return f"Created: {data['created']}"
    if "deleted" in data:
        return f"Deleted: {data['deleted']}"
    if "deleted_count" in data:
        return f"Deleted {data['deleted_count']} entries"
    return json.dumps(data)
