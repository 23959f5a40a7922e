from __future__ import annotations

"""
Domain Constants and Static Classification Tables.

Centralizes the fixed lists used by the classifier (ignored directories,
binary and source extensions, conventional build filenames) together with
the default scan limits and binary-sniffing heuristics.
"""

from typing import FrozenSet

# -----------------------------------------------------------------------------
# SCAN DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10 MiB
DEFAULT_SMALL_FILE_THRESHOLD: int = 8 * 1024  # 8 KiB
DEFAULT_MAX_DEPTH: int = 10
DEFAULT_ENCODING: str = "o200k_base"

# Binary sniffing heuristics
DEFAULT_SNIFF_SAMPLE_SIZE: int = 8192
DEFAULT_CONTROL_WINDOW: int = 1024
DEFAULT_CONTROL_RATIO: float = 0.30

# Control bytes that legitimately appear in text: tab, LF, FF, CR
TEXT_CONTROL_BYTES: FrozenSet[int] = frozenset({0x09, 0x0A, 0x0C, 0x0D})

UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")

# -----------------------------------------------------------------------------
# DIRECTORY PRUNING
# -----------------------------------------------------------------------------

# Compared case-insensitively against the directory base name
IGNORED_DIRECTORIES: FrozenSet[str] = frozenset({
    # Version control
    ".git", ".hg", ".svn", ".bzr", "_darcs", ".fossil",
    # Build outputs
    "target", "build", "dist", "out", "obj", ".next", ".nuxt",
    ".output", ".svelte-kit", ".turbo", ".parcel-cache", "coverage",
    # Dependency caches and virtual environments
    "node_modules", "bower_components", "jspm_packages", "vendor",
    "__pycache__", ".venv", "venv", ".tox", ".nox", ".mypy_cache",
    ".pytest_cache", ".ruff_cache", ".gradle", ".cargo", ".eggs",
    # IDE / editor metadata
    ".idea", ".vscode", ".vs", ".fleet", ".eclipse", ".settings",
})

# Per-directory ignore files honoured when respect_gitignore is on
IGNORE_FILE_NAMES = (".gitignore", ".ignore")

# -----------------------------------------------------------------------------
# FILE CLASSIFICATION
# -----------------------------------------------------------------------------

# Known binary formats: never source, regardless of content
BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    # Executables and native libraries
    ".exe", ".dll", ".so", ".dylib", ".bin", ".com", ".msi", ".app",
    ".elf", ".o", ".a", ".lib", ".obj", ".ko",
    # Compiled artifacts
    ".pyc", ".pyo", ".pyd", ".class", ".jar", ".war", ".ear", ".dex",
    ".wasm", ".rlib", ".pdb", ".beam", ".elc",
    # Archives
    ".zip", ".tar", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar", ".zst",
    ".lz", ".lzma", ".cab", ".iso", ".dmg", ".deb", ".rpm", ".apk",
    ".whl", ".egg", ".nupkg",
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".icns", ".tif",
    ".tiff", ".webp", ".psd", ".heic", ".avif", ".raw",
    # Audio / video
    ".mp3", ".wav", ".flac", ".ogg", ".aac", ".m4a", ".wma", ".mp4",
    ".mkv", ".avi", ".mov", ".wmv", ".webm", ".flv", ".m4v",
    # Office documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt",
    ".ods", ".odp", ".rtf",
    # Fonts
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
    # Databases and data blobs
    ".db", ".sqlite", ".sqlite3", ".mdb", ".parquet", ".npy", ".npz",
    ".pkl", ".pickle", ".h5", ".hdf5", ".onnx", ".pt", ".pth", ".ckpt",
    ".safetensors",
})

SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({
    # Python
    ".py", ".pyi", ".pyx", ".pxd", ".ipynb",
    # JavaScript / TypeScript
    ".js", ".mjs", ".cjs", ".jsx", ".ts", ".mts", ".cts", ".tsx",
    ".vue", ".svelte", ".astro",
    # Systems languages
    ".c", ".h", ".cc", ".cpp", ".cxx", ".hh", ".hpp", ".hxx", ".inl",
    ".rs", ".go", ".zig", ".nim", ".d", ".m", ".mm",
    # JVM / .NET
    ".java", ".kt", ".kts", ".scala", ".sc", ".groovy", ".clj", ".cljs",
    ".cs", ".fs", ".fsx", ".vb",
    # Scripting
    ".rb", ".php", ".phtml", ".pl", ".pm", ".lua", ".r", ".jl", ".tcl",
    ".sh", ".bash", ".zsh", ".fish", ".ps1", ".psm1", ".bat", ".cmd",
    # Functional / other languages
    ".hs", ".ml", ".mli", ".ex", ".exs", ".erl", ".hrl", ".elm",
    ".dart", ".swift", ".sol", ".proto", ".graphql", ".gql", ".sql",
    # Markup and styles
    ".html", ".htm", ".xml", ".xhtml", ".svg", ".css", ".scss", ".sass",
    ".less", ".md", ".markdown", ".mdx", ".rst", ".txt", ".adoc", ".tex",
    # Configuration formats
    ".json", ".jsonc", ".json5", ".yaml", ".yml", ".toml", ".ini",
    ".cfg", ".conf", ".properties", ".env", ".editorconfig",
    ".gitignore", ".gitattributes", ".dockerignore", ".csv", ".tsv",
    # Build-file formats
    ".gradle", ".cmake", ".mk", ".mak", ".bazel", ".bzl", ".csproj",
    ".fsproj", ".vbproj", ".sln", ".props", ".targets", ".lock", ".mod",
    ".sum", ".nix", ".tf", ".hcl",
})

# Compared case-insensitively for files without a recognized extension
SOURCE_FILENAMES: FrozenSet[str] = frozenset({
    "makefile", "gnumakefile", "dockerfile", "containerfile",
    "cmakelists.txt", "rakefile", "gemfile", "podfile", "procfile",
    "vagrantfile", "jenkinsfile", "brewfile", "justfile", "snakefile",
    "build", "workspace", "meson.build", "license", "readme",
    "changelog", "authors", "contributing", "copying", "notice",
    ".gitignore", ".dockerignore", ".editorconfig", ".env",
})
