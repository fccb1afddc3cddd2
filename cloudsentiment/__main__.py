from cloudsentiment.cli import app

app(prog_name="cloud-sentiment")
