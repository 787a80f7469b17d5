"""Reference agents for the Gymnasium environment."""
