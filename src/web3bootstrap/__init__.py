"""web3-bootstrap — idempotent Web3 workstation bootstrapper."""

__version__ = "0.1.0"
