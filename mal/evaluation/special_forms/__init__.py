"""Registry of special forms for the mal evaluator.

Maps names to handler functions that implement non-standard evaluation rules.
The library wraps each handler in a SpecialForm value in the default
namespace; the evaluator dispatches on that value before ordinary application.
"""

from mal.evaluation.special_forms.def_form import def_form
from mal.evaluation.special_forms.do_form import do_form
from mal.evaluation.special_forms.fn_form import fn_form
from mal.evaluation.special_forms.if_form import if_form
from mal.evaluation.special_forms.let_form import let_form

SPECIAL_FORMS = {
    "def!": def_form,
    "let*": let_form,
    "do": do_form,
    "if": if_form,
    "fn*": fn_form,
}
