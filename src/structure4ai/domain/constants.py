from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes default filter lists, the consolidated-format allow-lists and
language maps, size ceilings and naming defaults shared across the pipeline.
"""

from typing import Dict, FrozenSet, List

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_OUTPUT_PATH = "project-structure.md"
DEFAULT_FORMATS: List[str] = ["markdown", "json"]
DEFAULT_ANIMATION_DELAY_MS = 50

# Dotfiles that survive the hidden-file rule
ALLOWED_DOTFILES: FrozenSet[str] = frozenset({".gitignore", ".config"})

# -----------------------------------------------------------------------------
# DEFAULT IGNORE RULES
# -----------------------------------------------------------------------------

DEFAULT_IGNORE_FOLDERS: List[str] = [
    ".git", ".vs", ".vscode", "bin", "obj", "packages",
    "node_modules", ".idea", "Debug", "Release", "target",
    "__pycache__", ".pytest_cache", "dist", "build",
]

DEFAULT_IGNORE_FILES: List[str] = [
    "Thumbs.db", ".DS_Store", "desktop.ini", "*.tmp", "*.log",
]

DEFAULT_IGNORE_EXTENSIONS: List[str] = [
    ".exe", ".dll", ".pdb", ".cache", ".suo", ".user",
]

DEFAULT_CUSTOM_IGNORE_PATTERNS: List[str] = [
    "**/node_modules/**", "**/bin/Debug/**", "**/obj/**",
]

# -----------------------------------------------------------------------------
# CONSOLIDATED FORMAT
# -----------------------------------------------------------------------------

# Files larger than this are left out of the consolidated document
MAX_CONSOLIDATED_FILE_BYTES = 1024 * 1024

CONSOLIDATED_IGNORED_FOLDERS: FrozenSet[str] = frozenset({
    "bin", "obj", "node_modules", ".git", ".vs", ".vscode", "packages",
    "debug", "release", "dist", "build", "target", ".idea",
})

SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({
    ".cs", ".js", ".ts", ".py", ".java", ".cpp", ".c", ".h", ".hpp",
    ".php", ".rb", ".go", ".rs", ".kt", ".swift", ".dart", ".scala",
    ".html", ".css", ".scss", ".less", ".sql", ".xml", ".json", ".yaml", ".yml",
    ".md", ".txt", ".config", ".ini", ".toml", ".sh", ".bat", ".ps1",
    ".vue", ".jsx", ".tsx", ".svelte", ".razor", ".cshtml", ".vbhtml",
})

# Fence tags for syntax highlighting
LANGUAGE_CODES: Dict[str, str] = {
    ".cs": "csharp", ".js": "javascript", ".ts": "typescript", ".py": "python",
    ".java": "java", ".cpp": "cpp", ".c": "cpp", ".h": "cpp", ".hpp": "cpp",
    ".php": "php", ".rb": "ruby", ".go": "go", ".rs": "rust", ".kt": "kotlin",
    ".swift": "swift", ".dart": "dart", ".scala": "scala", ".html": "html",
    ".css": "css", ".scss": "scss", ".less": "less", ".sql": "sql", ".xml": "xml",
    ".json": "json", ".yaml": "yaml", ".yml": "yaml", ".md": "markdown",
    ".sh": "bash", ".bat": "batch", ".ps1": "powershell", ".vue": "vue",
    ".jsx": "jsx", ".tsx": "tsx", ".svelte": "svelte", ".razor": "razor",
    ".cshtml": "html", ".vbhtml": "html",
}

# Human readable names used in index headings
LANGUAGE_NAMES: Dict[str, str] = {
    ".cs": "C#", ".js": "JavaScript", ".ts": "TypeScript", ".py": "Python",
    ".java": "Java", ".cpp": "C++", ".c": "C", ".h": "C Header",
    ".hpp": "C++ Header", ".php": "PHP", ".rb": "Ruby", ".go": "Go",
    ".rs": "Rust", ".kt": "Kotlin", ".swift": "Swift", ".dart": "Dart",
    ".scala": "Scala", ".html": "HTML", ".css": "CSS", ".scss": "SCSS",
    ".less": "LESS", ".sql": "SQL", ".xml": "XML", ".json": "JSON",
    ".yaml": "YAML", ".yml": "YAML", ".md": "Markdown", ".txt": "Text",
    ".config": "Configuration", ".ini": "INI Configuration",
    ".toml": "TOML Configuration", ".sh": "Shell Script", ".bat": "Batch Script",
    ".ps1": "PowerShell", ".vue": "Vue.js", ".jsx": "JSX", ".tsx": "TSX",
    ".svelte": "Svelte", ".razor": "Razor", ".cshtml": "Razor HTML",
    ".vbhtml": "VB.NET HTML",
}
