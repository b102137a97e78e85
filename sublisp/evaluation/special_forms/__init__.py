"""Registry of special forms for the sublisp evaluator.

Maps expression variants to handler functions implementing their reduction
rule. The evaluator dispatches on the variant of the expression being reduced;
names, applications and self-evaluating values are handled by the evaluator
itself.
"""

from sublisp.types.expression import Binding, Conditional, Match, Quotation, Sequence
from sublisp.evaluation.special_forms.if_form import if_form
from sublisp.evaluation.special_forms.let_form import let_form
from sublisp.evaluation.special_forms.case_form import case_form
from sublisp.evaluation.special_forms.quote_forms import quote_form
from sublisp.evaluation.special_forms.list_form import list_form

SPECIAL_FORMS = {
    Conditional: if_form,
    Binding: let_form,
    Match: case_form,
    Quotation: quote_form,
    Sequence: list_form,
}
