"""Infrastructure layer: storage backends and event delivery."""
