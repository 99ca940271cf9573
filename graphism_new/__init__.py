"""graphism-new: scaffolding for new Graphism projects."""

__version__ = "0.1.0"
