"""
README generator — replaces October's own README on first run.
"""

from __future__ import annotations

from bootstrapper.core.models.config import InstallConfig
from bootstrapper.core.models.template import GeneratedFile


_README = """\
# {name}

This project was set up with october-bootstrapper.

## Getting started

```sh
october-bootstrapper install
```

Everything the installation needs is declared in `october.yaml`:
the database, the theme and the list of plugins. Run the command again
after editing it; plugins that are already present are left alone.

## Plugins

Plugins listed in `october.yaml` are installed automatically and are
ignored by git. Prefix a plugin with `!` to keep it under version
control and out of the installer's hands.
"""


def generate_readme(config: InstallConfig) -> GeneratedFile:
    return GeneratedFile(
        path="README.md",
        content=_README.format(name=config.app.name),
        overwrite=True,
        reason="project README",
    )
