"""ERC-20-like fungible token used as the escrowed asset."""
