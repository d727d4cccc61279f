"""Infrastructure Layer — marketplace API client, push channel, logging setup.

Invariants:
    - Infrastructure imports core/ only for errors and pure event tables
    - Every network failure is mapped to a BinHubError subclass
"""
