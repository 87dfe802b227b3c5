"""
.gitignore generator — the starting content of the tracking store.

Two variants: the regular one ignores October's vendor code and
generated files. The bare-repo variant ignores everything except the
project's own plugins and themes, for repositories that only version
custom code.
"""

from __future__ import annotations


_GITIGNORE = """\
# ── October CMS ─────────────────────────────────────────────────
/vendor
/bootstrap/compiled.php
/storage/cms/cache/*
/storage/cms/combiner/*
/storage/cms/twig/*
/storage/framework/cache/*
/storage/framework/sessions/*
/storage/framework/views/*
/storage/logs/*
/storage/temp/*
.env
*.sqlite

# ── IDE / Editor ────────────────────────────────────────────────
.idea
.vscode
*.swp

# ── OS files ────────────────────────────────────────────────────
.DS_Store
Thumbs.db
"""

_GITIGNORE_BARE = """\
# ── Bare repository: only custom code is versioned ─────────────
/*
!/.gitignore
!/october.yaml
!/README.md
!/plugins
!/themes
.env
"""


def gitignore_template(bare_repo: bool = False) -> str:
    return _GITIGNORE_BARE if bare_repo else _GITIGNORE
