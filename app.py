from flask import Flask
from config import DEBUG_ROUTES
from routes.debug import bp as debug_bp

# Tiny Flask shell so I can eyeball exports in a browser without a notebook.
app = Flask(__name__)
if DEBUG_ROUTES:
    # Debug routes live here for when I need to poke around.
    app.register_blueprint(debug_bp)

if __name__ == "__main__":
    # Running the dev server directly because that's how I like to test.
    app.run(host="127.0.0.1", port=5000)
