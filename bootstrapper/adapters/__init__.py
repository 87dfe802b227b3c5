"""
Adapters — the boundary to external tools (php, composer, git, network).

Everything that spawns a process or talks to the network lives here.
The engine only talks to these collaborators, never to subprocess directly.
"""
