from notes_app.main import run

run()
