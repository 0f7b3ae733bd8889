"""
Benchmark suite for jtree.

Compares jtree.loads against the standard library json, orjson and ujson,
and measures the scanner and renderer on their own. Run with the ``bench``
extra installed::

    pytest benchmarks --benchmark-only --benchmark-group-by=param:data_type
"""
