from datetime import date

from kyc_wallet import config
from kyc_wallet.models import Credential, DisclosureOption, DisclosureResult


def age_on(birth: date, today: date) -> int:
    # One year less if this year's birthday has not happened yet
    before_birthday = (today.month, today.day) < (birth.month, birth.day)
    return today.year - birth.year - (1 if before_birthday else 0)


def disclose(
    credential: Credential,
    option,
    wealth_threshold: float = config.DEFAULT_WEALTH_THRESHOLD,
    today: date = None,
) -> DisclosureResult:
    """Project `credential` down to what the verifier may see for `option`.

    Only claims from `credential.fields` and proofs derived from them are
    released; the holder's raw attributes never are. Unknown options yield
    an empty result. `wealth_threshold` is used as given.
    """
    base = {"id": credential.id, "holder": credential.holder}
    fields = credential.fields

    try:
        option = DisclosureOption(option)
    except ValueError:
        return DisclosureResult(**base)

    if option == DisclosureOption.ALL:
        return DisclosureResult(**base, disclosed_fields=fields.model_dump())

    if option == DisclosureOption.KYC_ONLY:
        return DisclosureResult(**base, disclosed_fields={"kyc_status": fields.kyc_status})

    if option == DisclosureOption.AGE_VERIFICATION:
        age = age_on(fields.date_of_birth, today or date.today())
        return DisclosureResult(**base, proofs={"is_over_18": age >= 18})

    # DisclosureOption.WEALTH_THRESHOLD
    return DisclosureResult(
        **base,
        disclosed_fields={"net_worth": fields.net_worth},
        proofs={
            "meets_wealth_threshold": fields.net_worth >= wealth_threshold,
            "wealth_threshold_value": wealth_threshold,
        },
    )
