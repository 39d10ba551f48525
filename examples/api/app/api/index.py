def GET(ctx):
    return ctx.text("Welcome to Bext")
