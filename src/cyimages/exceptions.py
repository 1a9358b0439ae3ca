import click


class InvalidArgument(click.ClickException):
    """
    Missing or malformed command line input. Reported before any file is touched.
    """


class OutputFolderExists(click.ClickException):
    def __init__(self, folder: str):
        super().__init__(f'output folder "{folder}" already exists')
        self.folder = folder
