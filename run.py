import os
from livewire_doctor import create_app

# Create the Flask app instance using the application factory
# It will load the config based on FLASK_CONFIG or default to 'development'
config_name = os.getenv('FLASK_CONFIG') or 'default'
app = create_app(config_name)

if __name__ == '__main__':
    # For production, use a proper WSGI server like Gunicorn or Waitress.
    print(f"Processing directory: {app.extensions['livewire_doctor'].processing_directory.value}")
    app.run(threaded=True)
