"""Pure middleware stages and the chain that composes them."""
