import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', f"sqlite:///{os.path.join(basedir, 'data', 'releves.db')}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logo embedded in PDF/Excel exports when the file exists
    LOGO_PATH = os.environ.get('LOGO_PATH', os.path.join(basedir, 'static', 'images', 'logo.png'))

    PORT = int(os.environ.get('PORT', 3000))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
