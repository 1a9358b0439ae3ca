import os
from string import Template
from typing import Any, Callable, Iterable

from cyimages.settings import settings


def render(template_name: str, context: dict, strip=True) -> str:
    template_file = os.path.join(settings.TEMPLATE_DIR, template_name + '.tpl')
    with open(template_file, 'r', encoding=settings.ENCODING) as f:
        s = Template(f.read()).substitute(context)
    # indented fragments keep their leading whitespace
    return s.strip() if strip else s.rstrip('\n')


def always(subject: Any) -> bool:
    return True


class Fragment:
    """
    A chunk of templated text, included only when its predicate holds for the subject
    (a VersionSpec or an ImageDescriptor).
    """
    def __init__(self, template_name: str, predicate: Callable[[Any], bool] = always, strip=True):
        self.template_name = template_name
        self.predicate = predicate
        self.strip = strip

    def included(self, subject) -> bool:
        return self.predicate(subject)

    def render(self, context: dict) -> str:
        return render(self.template_name, context, self.strip)

    def __repr__(self):
        return f'Fragment({self.template_name})'


def compose(fragments: Iterable[Fragment], subject, context: dict, separator='\n\n') -> str:
    return separator.join(fragment.render(context) for fragment in fragments
                          if fragment.included(subject))
