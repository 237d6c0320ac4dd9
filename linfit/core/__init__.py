"""Core numerical routines of the gradient descent pipeline."""
