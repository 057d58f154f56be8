from __future__ import annotations

"""
Project Type Detection.

Inspects marker files and extension counts under a root directory to label
the project (language, framework, description). Detection rules are
evaluated in a fixed order and the first match wins; a generic summary of
the most common extensions is used when no rule applies.
"""

import logging
import os
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from structure4ai.core.analysis.ignore_policy import IgnorePolicy

logger = logging.getLogger(__name__)

MAX_SCANNED_FILES = 500
MAX_SCANNED_DIRECTORIES = 200


@dataclass
class ProjectInfo:
    """Detected project metadata rendered in the consolidated document header."""
    type: str = "Unknown"
    language: str = ""
    framework: str = ""
    description: str = ""
    detected_files: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class _ScanResult:
    root_files: List[str]
    files: List[str]
    directories: List[str]

    def count_ext(self, ext: str) -> int:
        return sum(1 for f in self.files if f.endswith(ext))

    def any_file_contains(self, fragment: str) -> bool:
        return any(fragment in f for f in self.files)

    def any_dir_contains(self, fragment: str) -> bool:
        return any(fragment in d for d in self.directories)

    def has_root(self, *names: str) -> bool:
        return any(n in self.root_files for n in names)

# -----------------------------------------------------------------------------
# SCANNING
# -----------------------------------------------------------------------------

def _scan(root: str, policy: Optional[IgnorePolicy]) -> _ScanResult:
    """Collect lower-cased relative file/dir paths, capped for large trees."""
    root_files = sorted(
        name for name in os.listdir(root)
        if os.path.isfile(os.path.join(root, name))
    )

    files: List[str] = []
    directories: List[str] = []
    for current, dirs, names in os.walk(root):
        if policy is not None:
            dirs[:] = [d for d in dirs if not policy.must_ignore(d)]
        dirs.sort()

        rel_dir = os.path.relpath(current, root).replace(os.sep, "/")
        rel_dir = "" if rel_dir == "." else rel_dir

        for d in dirs:
            if len(directories) < MAX_SCANNED_DIRECTORIES:
                directories.append(f"{rel_dir}/{d}".lstrip("/").lower())

        for name in sorted(names):
            if policy is not None and policy.must_ignore(name):
                continue
            files.append(f"{rel_dir}/{name}".lstrip("/").lower())
            if len(files) >= MAX_SCANNED_FILES:
                return _ScanResult(root_files, files, directories)

    return _ScanResult(root_files, files, directories)

# -----------------------------------------------------------------------------
# DETECTION RULES
# -----------------------------------------------------------------------------

def _detect_dotnet(scan: _ScanResult, info: ProjectInfo) -> bool:
    csproj = [f for f in scan.files if f.endswith(".csproj")]
    sln = [f for f in scan.root_files if f.endswith(".sln")]
    if not (csproj or sln or scan.count_ext(".cs") > 3):
        return False

    info.language, info.framework = "C#", ".NET"
    info.detected_files.extend(csproj[:3] + sln)

    if (scan.any_dir_contains("controllers") or scan.any_dir_contains("wwwroot")
            or any(f.endswith("startup.cs") for f in scan.files)):
        info.type, info.description = "ASP.NET Web API / MVC", "ASP.NET Core Web Application"
    elif any(f.endswith("program.cs") for f in scan.files):
        info.type, info.description = ".NET Console Application", ".NET Console Application"
    else:
        info.type, info.description = ".NET Library/Application", ".NET Class Library or Application"
    return True


def _detect_node(scan: _ScanResult, info: ProjectInfo) -> bool:
    if not scan.has_root("package.json"):
        return False

    info.language, info.framework = "JavaScript/TypeScript", "Node.js"
    info.detected_files.append("package.json")
    if scan.count_ext(".ts") > scan.count_ext(".js"):
        info.language = "TypeScript"

    if scan.has_root("next.config.js") or scan.any_file_contains("next"):
        info.type, info.description = "Next.js Application", "Next.js React Framework"
    elif scan.has_root("angular.json") or scan.any_file_contains("angular"):
        info.type, info.description = "Angular Application", "Angular Frontend Framework"
    elif scan.any_file_contains("react") or scan.has_root("yarn.lock"):
        info.type, info.description = "React Application", "React Frontend Application"
    elif scan.any_file_contains("express"):
        info.type, info.description = "Express.js API", "Express.js Backend API"
    else:
        info.type, info.description = "Node.js Application", "Node.js Application"
    return True


def _detect_python(scan: _ScanResult, info: ProjectInfo) -> bool:
    if not (scan.count_ext(".py") or scan.has_root("requirements.txt", "setup.py", "pyproject.toml")):
        return False

    info.language, info.framework = "Python", "Python"
    info.detected_files.extend(
        n for n in ("requirements.txt", "setup.py", "pyproject.toml") if scan.has_root(n)
    )

    if scan.any_file_contains("django") or scan.has_root("manage.py"):
        info.type, info.description = "Django Web Application", "Django Web Framework"
    elif scan.any_file_contains("flask"):
        info.type, info.description = "Flask Web Application", "Flask Micro Web Framework"
    elif scan.any_file_contains("fastapi"):
        info.type, info.description = "FastAPI Application", "FastAPI Modern Web Framework"
    else:
        info.type, info.description = "Python Application", "Python Application or Script"
    return True


def _detect_java(scan: _ScanResult, info: ProjectInfo) -> bool:
    if not (scan.count_ext(".java") or scan.has_root("pom.xml", "build.gradle", "build.xml")):
        return False

    info.language, info.framework = "Java", "Java"
    if scan.has_root("pom.xml"):
        info.framework = "Maven"
        info.detected_files.append("pom.xml")
    elif scan.has_root("build.gradle"):
        info.framework = "Gradle"
        info.detected_files.append("build.gradle")

    if scan.any_file_contains("spring"):
        info.type, info.description = "Spring Boot Application", "Spring Boot Java Framework"
    else:
        info.type, info.description = "Java Application", "Java Application"
    return True


def _detect_php(scan: _ScanResult, info: ProjectInfo) -> bool:
    if not (scan.count_ext(".php") or scan.has_root("composer.json")):
        return False

    info.language, info.framework = "PHP", "PHP"
    if scan.has_root("composer.json"):
        info.detected_files.append("composer.json")

    if scan.any_file_contains("laravel") or scan.any_dir_contains("artisan"):
        info.type, info.description = "Laravel Application", "Laravel PHP Framework"
    elif scan.any_file_contains("symfony"):
        info.type, info.description = "Symfony Application", "Symfony PHP Framework"
    else:
        info.type, info.description = "PHP Application", "PHP Web Application"
    return True


def _detect_ruby(scan: _ScanResult, info: ProjectInfo) -> bool:
    if not (scan.count_ext(".rb") or scan.has_root("Gemfile", "Rakefile")):
        return False

    info.language, info.framework = "Ruby", "Ruby"
    if scan.has_root("Gemfile"):
        info.detected_files.append("Gemfile")

    if scan.any_file_contains("rails") or scan.any_dir_contains("config"):
        info.type, info.description = "Ruby on Rails Application", "Ruby on Rails Framework"
    else:
        info.type, info.description = "Ruby Application", "Ruby Application or Script"
    return True


def _detect_go(scan: _ScanResult, info: ProjectInfo) -> bool:
    if not (scan.count_ext(".go") or scan.has_root("go.mod", "go.sum")):
        return False

    info.language = info.framework = "Go"
    info.type, info.description = "Go Application", "Go Application or Service"
    if scan.has_root("go.mod"):
        info.detected_files.append("go.mod")
    return True


def _detect_rust(scan: _ScanResult, info: ProjectInfo) -> bool:
    if not (scan.count_ext(".rs") or scan.has_root("Cargo.toml", "Cargo.lock")):
        return False

    info.language = info.framework = "Rust"
    info.type, info.description = "Rust Application", "Rust Application or Library"
    if scan.has_root("Cargo.toml"):
        info.detected_files.append("Cargo.toml")
    return True


def _detect_static_web(scan: _ScanResult, info: ProjectInfo) -> bool:
    has_assets = scan.count_ext(".css") > 0 or scan.count_ext(".js") > 0
    if not (scan.count_ext(".html") > 0 and has_assets and not scan.has_root("package.json")):
        return False

    info.language, info.framework = "HTML/CSS/JavaScript", "Frontend"
    info.type, info.description = "Static Website", "Static HTML/CSS/JS Website"
    return True


def _detect_generic(scan: _ScanResult, info: ProjectInfo) -> bool:
    counts = Counter(
        os.path.splitext(f)[1] for f in scan.files if os.path.splitext(f)[1]
    )
    top = [ext for ext, _ in counts.most_common(3)]
    if not top:
        return False

    info.type = "Mixed Project"
    info.language = ", ".join(top)
    info.description = f"Project with: {info.language}"
    return True


_RULES: List[Callable[[_ScanResult, ProjectInfo], bool]] = [
    _detect_dotnet,
    _detect_node,
    _detect_python,
    _detect_java,
    _detect_php,
    _detect_ruby,
    _detect_go,
    _detect_rust,
    _detect_static_web,
    _detect_generic,
]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def detect_project_type(root: str, policy: Optional[IgnorePolicy] = None) -> ProjectInfo:
    """
    Label the project rooted at `root`.

    Args:
        root: Project root directory.
        policy: Optional ignore rules applied while scanning.

    Returns:
        ProjectInfo: Detected metadata; type "Unknown" for empty or
        unreadable trees. Never raises for filesystem failures.
    """
    try:
        scan = _scan(os.path.abspath(root), policy)
    except OSError as e:
        logger.warning(f"Project type detection skipped for '{root}': {e}")
        return ProjectInfo()

    for rule in _RULES:
        info = ProjectInfo()
        if rule(scan, info):
            logger.debug(f"Detected project type: {info.type}")
            return info
    return ProjectInfo()
