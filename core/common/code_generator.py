import re


class CodeGenerator:
    """
    Sequential human readable codes of the form PREFIX-YYYY-NNNN.
    The sequence restarts every year.
    """

    @classmethod
    def format_code(cls, prefix, year, number):
        return f"{prefix}-{year}-{number:04d}"

    @classmethod
    def next_sequential_code(cls, queryset, prefix, year, field="code"):
        """
        Return the next free code for ``prefix`` and ``year`` among the rows of
        ``queryset``. Callers run this inside the transaction that inserts the
        row; the unique constraint on the code field rejects a concurrent
        duplicate.
        """
        stem = f"{prefix}-{year}-"
        pattern = re.compile(rf"^{re.escape(stem)}(\d+)$")
        highest = 0
        for code in queryset.filter(**{f"{field}__startswith": stem}).values_list(field, flat=True):
            match = pattern.match(code)
            if match:
                highest = max(highest, int(match.group(1)))
        return cls.format_code(prefix, year, highest + 1)
