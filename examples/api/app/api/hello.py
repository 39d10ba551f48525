async def GET(ctx):
    return "Hello, World!"
