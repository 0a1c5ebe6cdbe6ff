from reset_api import create_app

# This is the entry point for the application.
# Settings are read once from the environment (and .env) inside create_app().
app = create_app()

if __name__ == '__main__':
    settings = app.config['APP_SETTINGS']
    app.logger.info(f"Server is running on port {settings.port}")
    # The reloader would start a second process and a second MongoDB connection attempt
    app.run(host=settings.host, port=settings.port, use_reloader=False)
