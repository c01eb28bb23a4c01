from package_feed.cli import app

app(prog_name="package-feed")
