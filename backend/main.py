from recipe_proxy.app import create_app

# ASGI app, e.g. `uvicorn main:app`
app = create_app()
