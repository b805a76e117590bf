from bugvisits import create_app

app = create_app()
