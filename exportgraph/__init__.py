"""
exportgraph: Cross-file export resolution for JavaScript and TypeScript projects.

exportgraph reads the syntax trees produced by an external parser (such as
``@babel/parser``) and builds a cross-file symbol table, enabling you to:
- Find exported symbols that no other file imports
- Trace a re-exported name back to its declaring file
- Detect re-export cycles

Usage:
    from exportgraph.core.analyzer import Analyzer
    from exportgraph.core.config import load_settings
    from exportgraph.core.graph.analysis import find_unused_exports

    analyzer = Analyzer(load_settings(entry_files=["src/index.js"]))
    analyzer.analyze_directory(Path("ast"))
    for unused in find_unused_exports(analyzer.graph):
        print(unused.file, unused.name)
"""

__version__ = "0.1.0"
