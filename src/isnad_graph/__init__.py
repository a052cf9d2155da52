"""isnad-graph: layered layouts of isnad transmission networks."""

__version__ = "0.1.0"
