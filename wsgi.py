"""
WSGI entry point

    gunicorn wsgi:app
    python wsgi.py
"""
import os

from pdf_images import create_app

app = create_app(os.getenv('APP_ENV') or os.getenv('FLASK_ENV', 'default'))

if __name__ == '__main__':
    port = app.config['PORT']
    app.logger.info('PDF to Images API running on port %s', port)
    app.logger.info('Health check: http://localhost:%s/health', port)
    app.logger.info('Convert endpoint: POST http://localhost:%s/convert-pdf-to-images', port)
    app.run(host='0.0.0.0', port=port)
