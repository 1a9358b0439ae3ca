import click

from cyimages import browser_image, ci_config


@click.group(help='Generate Docker assets and CI config for the cypress images')
def cli():
    pass


cli.add_command(browser_image.generate, name='add-browser')
cli.add_command(ci_config.generate, name='generate-config')


if __name__ == '__main__':
    cli()
