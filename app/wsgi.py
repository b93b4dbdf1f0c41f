from app.postpanel import create_app

app = create_app()
