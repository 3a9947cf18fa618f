"""ASGI server layer: request handling, response sending, and pounce runners."""
