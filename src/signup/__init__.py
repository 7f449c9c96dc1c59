"""signup - user registration with email activation."""
