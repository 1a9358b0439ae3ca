from typing import Optional

from pydantic import BaseModel, ConfigDict

from cyimages.enums import ImageType


def major_version(version: str) -> str:
    return version.split('.')[0]


class VersionSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    node: str
    chrome: Optional[str] = None
    firefox: Optional[str] = None
    edge: bool = False

    @property
    def has_chrome(self) -> bool:
        return bool(self.chrome)

    @property
    def has_firefox(self) -> bool:
        return bool(self.firefox)

    @property
    def has_browser(self) -> bool:
        return self.has_chrome or self.has_firefox or self.edge

    @property
    def chrome_major(self) -> Optional[str]:
        return major_version(self.chrome) if self.chrome else None

    @property
    def firefox_major(self) -> Optional[str]:
        return major_version(self.firefox) if self.firefox else None

    @property
    def command_line(self) -> str:
        """
        Canonical invocation that regenerates the same artifacts
        """
        args = ['cyimages', 'add-browser', self.node]
        if self.chrome:
            args.append(f'--chrome={self.chrome}')
        if self.firefox:
            args.append(f'--firefox={self.firefox}')
        if self.edge:
            args.append('--edge')
        return ' '.join(args)


class GeneratedArtifacts(BaseModel):
    model_config = ConfigDict(frozen=True)

    folder_name: str
    dockerfile: str
    readme: str
    build_script: str


class ImageDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    tag: str

    @property
    def image_type(self) -> ImageType:
        if 'base' in self.name:
            return ImageType.base
        if 'browser' in self.name:
            return ImageType.browser
        return ImageType.included

    @property
    def image_folder(self) -> str:
        return 'browsers' if self.name == 'browser' else self.name
