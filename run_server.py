import logging

from waitress import serve

from app import app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    print("🚀 Running Logo Finder on production WSGI server (Waitress)...")
    serve(app, host="0.0.0.0", port=5000)
