import logging

from aulas import create_app, bootstrap

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = create_app()

# Seeding must finish before the first request is served
bootstrap(app)

if __name__ == '__main__':
    logger.info("Starting Flask development server...")
    app.run(host='0.0.0.0')
