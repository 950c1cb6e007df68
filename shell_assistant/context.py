"""
Builds the directory snapshot that is prepended to every prompt, so the model knows
where the user is and what is around them.
"""

import os

from typing import List

# A reasonable approximation for 1k tokens (1 token ~= 4 chars) to keep prompts concise.
PROMPT_CHAR_LIMIT = 4000
MAX_CHAR_LIMIT_PER_FILE = 800


def _read_sample_of_file(filepath: str, max_chars: int = MAX_CHAR_LIMIT_PER_FILE) -> str:
    try:
        with open(filepath, "r", encoding="utf-8", errors="ignore") as f:
            content = f.read(max_chars)
            if len(content) == max_chars:
                content += "\n... (truncated)"
            return content
    except OSError as e:
        return f"(could not read file: {e})"


def _walk(root: str, current: str, entries: List[str]):
    # Depth-first, lexical order: each directory is listed right before its children.
    for name in sorted(os.listdir(current)):
        path = os.path.join(current, name)
        entries.append(os.path.relpath(path, root))
        if os.path.isdir(path) and not os.path.islink(path):
            _walk(root, path, entries)


def _file_contents_section(directory: str, relative_paths: List[str]) -> str:
    sections = []
    current_size = 0
    truncated = False

    for relative_path in relative_paths:
        path = os.path.join(directory, relative_path)
        if not os.path.isfile(path):
            continue

        section = f"--- {relative_path} ---\n{_read_sample_of_file(path)}\n"
        if current_size + len(section) > PROMPT_CHAR_LIMIT:
            truncated = True
            break  # Stop adding more files if we exceed the limit.

        sections.append(section)
        current_size += len(section)

    content = "File contents:\n" + "".join(sections)
    if truncated:
        content += f"... (file contents truncated to {PROMPT_CHAR_LIMIT} characters)\n"
    return content


def get_directory_contents(directory: str, include_files: bool = False) -> str:
    """Lists the immediate entries of `directory`."""
    names = sorted(os.listdir(directory))

    info = f"Current directory: {directory}\nDirectory contents:\n"
    info += "".join(f"- {name}\n" for name in names)
    if include_files:
        info += _file_contents_section(directory, names)
    return info


def get_all_directory_contents(directory: str, include_files: bool = False) -> str:
    """Lists every file and directory below `directory`, relative to it."""
    entries: List[str] = []
    _walk(directory, directory, entries)

    info = f"Current directory: {directory}\nAll directory contents:\n"
    info += "".join(f"- {entry}\n" for entry in entries)
    if include_files:
        info += _file_contents_section(directory, entries)
    return info


def build_prompt(directory_info: str, prompt: str) -> str:
    return directory_info + "\n" + prompt
