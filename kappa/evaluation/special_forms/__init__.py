"""Registry of special forms for the Kappa evaluator.

Maps Symbols to handler functions that receive their arguments unevaluated.
The builtin registration wraps each handler in a SpecialForm and binds it in
the root environment, where the evaluator finds it as an ordinary head value.
"""

from kappa.types.symbol import Symbol
from kappa.evaluation.special_forms.quote_form import quote_form
from kappa.evaluation.special_forms.do_form import do_form
from kappa.evaluation.special_forms.define_form import def_form, defn_form
from kappa.evaluation.special_forms.fn_form import fn_form
from kappa.evaluation.special_forms.if_form import if_form
from kappa.evaluation.special_forms.cond_form import cond_form
from kappa.evaluation.special_forms.logic_forms import and_form, or_form
from kappa.evaluation.special_forms.let_form import let_form

SPECIAL_FORMS = {
    Symbol("quote"): quote_form,
    Symbol("do"): do_form,
    Symbol("def"): def_form,
    Symbol("defn"): defn_form,
    Symbol("fn"): fn_form,
    Symbol("if"): if_form,
    Symbol("cond"): cond_form,
    Symbol("and"): and_form,
    Symbol("or"): or_form,
    Symbol("let"): let_form,
}
