import os

import click
import semver
from loguru import logger

from cyimages.exceptions import InvalidArgument, OutputFolderExists
from cyimages.schemas import VersionSpec, GeneratedArtifacts
from cyimages.settings import settings
from cyimages.templating import Fragment, compose, render
from cyimages.utils import configure_logging, write_file, make_executable, spawn, EXTRA_ARGS_SETTINGS, \
    warn_ignored_args

GENERATOR = 'cyimages.browser_image'


def has_chrome(spec: VersionSpec) -> bool:
    return spec.has_chrome


def has_firefox(spec: VersionSpec) -> bool:
    return spec.has_firefox


def has_edge(spec: VersionSpec) -> bool:
    return spec.edge


# apt packages, one indented fragment per group
PACKAGE_FRAGMENTS = [
    Fragment('browsers/base-packages', strip=False),
    Fragment('browsers/firefox-packages', has_firefox, strip=False),
    Fragment('browsers/edge-packages', has_edge, strip=False),
]

DOCKERFILE_FRAGMENTS = [
    Fragment('browsers/header'),
    Fragment('browsers/dependencies'),
    Fragment('browsers/libappindicator'),
    Fragment('browsers/chrome', has_chrome),
    Fragment('browsers/dbus'),
    Fragment('browsers/firefox', has_firefox),
    Fragment('browsers/edge', has_edge),
    Fragment('browsers/versions'),
    Fragment('browsers/env'),
]


def is_strict_semver(version: str) -> bool:
    try:
        ver = semver.Version.parse(version)
    except (ValueError, TypeError):
        return False
    return ver.prerelease is None and ver.build is None


def parse_version_spec(node_version: str = None, chrome: str = None, firefox: str = None,
                       edge: bool = False) -> VersionSpec:
    if not node_version or not is_strict_semver(node_version):
        raise InvalidArgument('expected a base image version like 16.5.0')

    spec = VersionSpec(node=node_version, chrome=chrome or None, firefox=firefox or None, edge=edge)
    if not spec.has_browser:
        raise InvalidArgument('expected at least one browser version like --chrome=94.0.4606.71')
    return spec


def resolve_tag(spec: VersionSpec) -> str:
    tag = f'node{spec.node}'
    if spec.has_chrome:
        tag += f'-chrome{spec.chrome_major}'
    if spec.has_firefox:
        tag += f'-ff{spec.firefox_major}'
    if spec.edge:
        tag += '-edge'
    return tag


def resolve_output_folder(spec: VersionSpec) -> str:
    """
    Pick browsers/<tag>, falling back to browsers/<tag>-slim if that already exists.
    The chosen folder is created before returning.
    """
    tag = resolve_tag(spec)
    browsers_dir = settings.get_browsers_dir()
    output_folder = os.path.join(browsers_dir, tag)

    if os.path.isdir(output_folder):
        logger.info(f'existing folder "{output_folder}" found')
        output_folder = os.path.join(browsers_dir, f'{tag}-slim')
        if os.path.exists(output_folder):
            raise OutputFolderExists(output_folder)

    logger.info(f'creating "{output_folder}"')
    os.makedirs(output_folder)
    return output_folder


def get_image_name(folder_name: str) -> str:
    return f'{settings.BROWSERS_IMAGE}:{folder_name}'


def get_context(spec: VersionSpec, folder_name: str) -> dict:
    return dict(generator=GENERATOR,
                invocation=spec.command_line,
                image_name=get_image_name(folder_name),
                base_image=settings.BASE_IMAGE,
                node_version=spec.node,
                chrome_version=spec.chrome or '',
                firefox_version=spec.firefox or '',
                chrome_version_cmd='$(google-chrome --version)' if spec.has_chrome else 'n/a',
                firefox_version_cmd='$(firefox --version)' if spec.has_firefox else 'n/a',
                edge_version_cmd='$(edge --version)' if spec.edge else 'n/a')


def render_dockerfile(spec: VersionSpec, folder_name: str) -> str:
    context = get_context(spec, folder_name)
    context['packages'] = compose(PACKAGE_FRAGMENTS, spec, context, separator='\n')
    return compose(DOCKERFILE_FRAGMENTS, spec, context)


def browser_summary(spec: VersionSpec) -> str:
    browsers = []
    if spec.has_chrome:
        browsers.append(f'Chrome {spec.chrome}')
    if spec.has_firefox:
        browsers.append(f'Firefox {spec.firefox}')
    if spec.edge:
        browsers.append('Edge')
    return ', '.join(browsers)


def render_readme(spec: VersionSpec, folder_name: str) -> str:
    return render('browsers/readme', dict(browsers=browser_summary(spec),
                                          **get_context(spec, folder_name)))


def render_build_script(spec: VersionSpec, folder_name: str) -> str:
    return render('browsers/build', get_context(spec, folder_name))


def render_artifacts(spec: VersionSpec, output_folder: str) -> GeneratedArtifacts:
    folder_name = os.path.basename(output_folder)
    return GeneratedArtifacts(folder_name=folder_name,
                              dockerfile=render_dockerfile(spec, folder_name),
                              readme=render_readme(spec, folder_name),
                              build_script=render_build_script(spec, folder_name))


def write_artifacts(artifacts: GeneratedArtifacts, output_folder: str):
    write_file(os.path.join(output_folder, 'Dockerfile'), artifacts.dockerfile)
    write_file(os.path.join(output_folder, 'README.md'), artifacts.readme)
    build_file = os.path.join(output_folder, 'build.sh')
    write_file(build_file, artifacts.build_script)
    make_executable(build_file)


def trigger_downstream(spec: VersionSpec, folder_name: str):
    """
    Launch the config, readme and commit generators in turn. None of them are waited on and
    a failure in any of them leaves the written artifacts in place.
    """
    browser_args = (f'--chrome={spec.chrome or ""} --firefox={spec.firefox or ""} '
                    f'--edge={"true" if spec.edge else ""}')
    spawn(settings.CONFIG_GENERATOR_CMD, 'browser', folder_name)
    spawn(settings.README_GENERATOR_CMD, get_image_name(folder_name), browser_args)
    spawn(settings.COMMIT_GENERATOR_CMD, 'browsers', folder_name)


def generate_browser_image(spec: VersionSpec, downstream=True) -> str:
    output_folder = resolve_output_folder(spec)
    artifacts = render_artifacts(spec, output_folder)
    write_artifacts(artifacts, output_folder)

    logger.info(f'Please add the newly generated folder {output_folder} to Git. '
                f'Build the Docker container locally to make sure it is correct.')

    if downstream:
        trigger_downstream(spec, artifacts.folder_name)
    return output_folder


@click.command(help='Generate the Dockerfile, README and build script for a new browser image',
               context_settings=EXTRA_ARGS_SETTINGS)
@click.argument('node_version', required=False)
@click.option('--chrome', help='Chrome version, like 94.0.4606.71')
@click.option('--firefox', help='Firefox version, like 93.0')
@click.option('--edge', is_flag=True, default=False, help='Install the Edge dev channel')
@click.option('--skip-downstream', is_flag=True, default=False,
              help="Don't launch the config, readme and commit generators")
def generate(node_version: str, chrome: str, firefox: str, edge: bool, skip_downstream: bool):
    configure_logging()
    warn_ignored_args()
    spec = parse_version_spec(node_version, chrome, firefox, edge)
    generate_browser_image(spec, downstream=settings.TRIGGER_DOWNSTREAM and not skip_downstream)


if __name__ == '__main__':
    generate()
